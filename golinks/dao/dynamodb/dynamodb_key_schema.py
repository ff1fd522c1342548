import functools
from collections.abc import Callable


__all__ = ['DynamoDBKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class DynamoDBKeySchema:
    """Provide standardized partition keys ('pk') for records in the DynamoDB table.

    Every link mapping is one record whose identifier is derived from its token,
    so a redirect is a single GetItem by primary key.

    Record ids follow the same prefixing rules as RedisKeySchema keys.
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def link_record_id(self, token: str) -> str:
        return f'link#{token}'

    @prefix_key
    def destinations_record_id(self, content_id: str) -> str:
        return f'item#{content_id}'
