from typing import Any
from collections.abc import Callable


# Type aliases for Python dictionaries
type LambdaEvent = dict[str, Any]
type LambdaContext = Any
type LambdaResponse = dict[str, Any]
type LambdaConfiguration = dict[str, Any]
type HttpHeaders = dict[str, str]

# Token derivation strategy: destination URL in, token out
type TokenFactory = Callable[[str], str]
