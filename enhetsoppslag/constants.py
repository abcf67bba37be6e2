"""Konstanter for Enhetsoppslag."""

APP_TITLE = "Enhetsoppslag"
VERSION = "1.0.0"
ENHETSREGISTER_API_URL = "https://data.brreg.no/enhetsregisteret/api"
USER_AGENT = f"enhetsoppslag/{VERSION}"
DEFAULT_TIMEOUT = 2

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 64
EXIT_NOT_FOUND = 90
EXIT_REMOVED = 91
