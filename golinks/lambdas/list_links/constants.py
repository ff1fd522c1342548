# Log/response event codes
MISSING_CONTENT_ID = 'MISSING_CONTENT_ID'
LINKS_LISTED = 'LINKS_LISTED'
STORE_UNAVAILABLE = 'STORE_UNAVAILABLE'
CONFIG_UNAVAILABLE = 'CONFIG_UNAVAILABLE'
