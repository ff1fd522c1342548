# Log/response event codes
INVALID_REQUEST_BODY = 'INVALID_REQUEST_BODY'
MISSING_URL = 'MISSING_URL'
INVALID_URL = 'INVALID_URL'
PREVIEW_SUCCESS = 'PREVIEW_SUCCESS'
CONFIG_UNAVAILABLE = 'CONFIG_UNAVAILABLE'
