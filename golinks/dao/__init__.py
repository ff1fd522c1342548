from golinks.dao.factory import link_dao_from_config, destination_list_dao_from_config


__all__ = [
    'link_dao_from_config',
    'destination_list_dao_from_config',
]
