# Log/response event codes
INVALID_REQUEST_BODY = 'INVALID_REQUEST_BODY'
MISSING_TARGET_URL = 'MISSING_TARGET_URL'
INVALID_TARGET_URL = 'INVALID_TARGET_URL'
LINK_SHORTENED = 'LINK_SHORTENED'
STORE_UNAVAILABLE = 'STORE_UNAVAILABLE'
CONFIG_UNAVAILABLE = 'CONFIG_UNAVAILABLE'
