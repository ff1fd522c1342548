from golinks.dao.base.link_base_dao import LinkBaseDAO
from golinks.dao.base.destination_list_base_dao import DestinationListBaseDAO


__all__ = [
    'LinkBaseDAO',
    'DestinationListBaseDAO',
]
