from dataclasses import dataclass, field


# fmt: off
@dataclass(frozen=True)
class DestinationListModel:
    content_id: str                                 # Content item owning the list
    urls: tuple[str, ...] = field(default=())       # Cleaned destination URLs, in editor order (duplicates allowed)
# fmt: on
