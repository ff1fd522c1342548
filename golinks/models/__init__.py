from golinks.models.link_model import LinkModel
from golinks.models.destination_list_model import DestinationListModel


__all__ = [
    'LinkModel',
    'DestinationListModel',
]
