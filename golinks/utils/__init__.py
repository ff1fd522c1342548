from golinks.utils.config import app_env, app_name, app_prefix, load_config, token_factory
from golinks.utils.helpers import base_url, get_short_url, link_payload, request_body, require_environment, guarantee_500_response
from golinks.utils.shortener import derive_token, ensure_scheme, clean_url, clean_destination_urls, is_token
from golinks.utils.logging import initialize_logging


__all__ = [
    'derive_token',
    'ensure_scheme',
    'clean_url',
    'clean_destination_urls',
    'is_token',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'token_factory',
    'base_url',
    'get_short_url',
    'link_payload',
    'request_body',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
