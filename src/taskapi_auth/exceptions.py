"""Authentication infrastructure exceptions.

These exceptions are raised by the taskapi_auth package and should be
caught and translated by the application layer.
"""


class AuthError(Exception):
    """Base exception for all authentication infrastructure errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class StoreUnavailableError(AuthError):
    """Raised when the user or credential store cannot be reached.

    Distinct from a failed lookup: callers must not treat it as bad
    credentials.
    """

    def __init__(self, message: str = "Credential store is unavailable"):
        super().__init__(message)
