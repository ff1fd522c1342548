# Log/response event codes
MISSING_CONTENT_ID = 'MISSING_CONTENT_ID'
INVALID_REQUEST_BODY = 'INVALID_REQUEST_BODY'
INVALID_URL_LIST = 'INVALID_URL_LIST'
LINKS_SAVED = 'LINKS_SAVED'
LINKS_CLEARED = 'LINKS_CLEARED'
STORE_UNAVAILABLE = 'STORE_UNAVAILABLE'
CONFIG_UNAVAILABLE = 'CONFIG_UNAVAILABLE'
