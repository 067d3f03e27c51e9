"""
Exit codes for the ghrepo command.

Codes above 64 follow sysexits.h so scripts can tell a bad invocation
from an authentication or configuration problem.
"""

GENERAL_ERROR = 1        # Anything without a more specific code
USAGE_ERROR = 2          # Conflicting selectors, bad sort descriptor, missing token
API_ERROR = 65           # GitHub answered with an error
CONFIG_ERROR = 66        # Unreadable config or credential file
NETWORK_ERROR = 68       # GitHub could not be reached
AUTH_ERROR = 69          # Neither the cached credential nor a new login worked
INTERRUPTED = 130        # Ctrl+C

# Exceptions that escape a command, matched by class name so this module
# does not need to import requests or yaml
EXCEPTION_EXIT_CODES = {
    'GitHubAPIError': API_ERROR,
    'ConnectionError': NETWORK_ERROR,
    'Timeout': NETWORK_ERROR,
    'CredentialStoreError': CONFIG_ERROR,
    'YAMLError': CONFIG_ERROR,
}


def get_exit_code_for_exception(exc: Exception) -> int:
    """Exit code for an exception that reached the command boundary."""
    if isinstance(exc, CommandError):
        return exc.exit_code
    for cls in type(exc).__mro__:
        if cls.__name__ in EXCEPTION_EXIT_CODES:
            return EXCEPTION_EXIT_CODES[cls.__name__]
    return GENERAL_ERROR


class CommandError(Exception):
    """An error the command reports as "Error: <message>" with its own exit code."""

    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class ValidationError(CommandError):
    """Raised for invalid options, before any network call is made."""

    def __init__(self, message: str):
        super().__init__(message, USAGE_ERROR)


class AuthenticationError(CommandError):
    """Raised when neither the cached credential nor a new login is usable."""

    def __init__(self, message: str = "Failed to obtain credential from GitHub"):
        super().__init__(message, AUTH_ERROR)


class ConfigError(CommandError):
    """Raised when an explicitly requested config file cannot be used."""

    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)
