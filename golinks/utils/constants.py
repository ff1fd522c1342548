from enum import StrEnum


# Expiring link policy: sliding TTL refreshed on every put
LINK_TTL_SECONDS = 2_592_000  # 60 * 60 * 24 * 30

# Token derivation: number of leading MD5 hex digits kept
TOKEN_LENGTH = 10

# Consolidated map policy: optimistic transaction attempts before giving up
MAP_CAS_ATTEMPTS = 5

# DynamoDB: maximum number of records written by one TransactWriteItems call
DYNAMODB_TRANSACTION_LIMIT = 100

# Scheme prepended to destination URLs without one
DEFAULT_SCHEME = 'https'

# Schemes accepted for destination URLs
ALLOWED_SCHEMES = frozenset(
    {
        'http',
        'https',
        'ftp',
        'ftps',
        'mailto',
        'news',
        'irc',
        'gopher',
        'nntp',
        'feed',
        'telnet',
        'mms',
        'rtsp',
        'sms',
        'svn',
        'tel',
        'fax',
        'xmpp',
        'webcal',
        'urn',
    }
)

# Redirect endpoint must never be indexed by crawlers
ROBOTS_HEADERS = {'X-Robots-Tag': 'noindex, nofollow, noarchive'}

# Editor-facing endpoints are called from the admin UI
CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,PUT,GET',
}


class LinkPolicy(StrEnum):
    """Lifecycle policies of the link mapping store."""

    EXPIRING = 'expiring'
    PERMANENT = 'permanent'
    RECORD = 'record'
    MAP = 'map'


# Application: environment variables
APP_ENV_ENV = 'APP_ENV'
APP_NAME_ENV = 'APP_NAME'
AWS_SAM_LOCAL_ENV = 'AWS_SAM_LOCAL'
LOG_LEVEL_ENV = 'LOG_LEVEL'
TOKEN_FACTORY_ENV = 'TOKEN_FACTORY'

# AppConfig: environment variables
APPCONFIG_APP_ID_ENV = 'APPCONFIG_APP_ID'
APPCONFIG_ENV_ID_ENV = 'APPCONFIG_ENV_ID'
APPCONFIG_PROFILE_ID_ENV = 'APPCONFIG_PROFILE_ID'
APPCONFIG_AGENT_URL_ENV = 'APPCONFIG_AGENT_URL'
APPCONFIG_PROFILE_NAME_ENV = 'APPCONFIG_PROFILE_NAME'

# LocalStack: endpoint URL environment variable for local development
LOCALSTACK_ENDPOINT_ENV = 'LOCALSTACK_ENDPOINT'

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
STORE_UNAVAILABLE = 'STORE_UNAVAILABLE'
