# Log/response event codes
MISSING_TOKEN = 'MISSING_TOKEN'
LINK_NOT_FOUND = 'LINK_NOT_FOUND'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
STORE_UNAVAILABLE = 'STORE_UNAVAILABLE'
CONFIG_UNAVAILABLE = 'CONFIG_UNAVAILABLE'
