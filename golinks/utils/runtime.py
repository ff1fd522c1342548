"""Runtime environment detection"""

import os

from golinks.utils.constants import APP_ENV_ENV, AWS_SAM_LOCAL_ENV


def running_locally() -> bool:
    """True under `sam local` (AWS_SAM_LOCAL=true) or when APP_ENV is 'local'

    Local runs surface unexpected handler errors as tracebacks instead of 500
    responses, and read AppConfig from the local agent.
    """
    if os.getenv(AWS_SAM_LOCAL_ENV) == 'true':
        return True
    return os.getenv(APP_ENV_ENV, '').lower() == 'local'
