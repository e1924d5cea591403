"""User domain exceptions."""

from taskapi.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
)


class InvalidEmailError(ValueError):
    """
    Raised when email format is invalid.

    This exception is raised during Email value object creation
    when the provided string doesn't match expected email format.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


class UserAlreadyExistsError(ConflictError):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        super().__init__(
            "User with this email already exists",
            code=ErrorCode.USER_ALREADY_EXISTS,
            details={"email": email},
        )
        self.email = email


class UserNotFoundError(EntityNotFoundError):
    """User not found."""

    def __init__(self, identifier: str) -> None:
        super().__init__(
            f"User not found: {identifier}",
            code=ErrorCode.USER_NOT_FOUND,
        )
        self.identifier = identifier


class InvalidCredentialsError(DomainException):
    """Unknown email or wrong password.

    Both cases share this error so callers cannot probe for accounts.
    """

    def __init__(self) -> None:
        super().__init__("Invalid email or password", code=ErrorCode.INVALID_CREDENTIALS)


class AccountDisabledError(DomainException):
    """Credentials are correct but the account may not log in."""

    def __init__(self) -> None:
        super().__init__("Account is disabled", code=ErrorCode.ACCOUNT_DISABLED)
