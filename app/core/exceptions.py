"""Error taxonomy for registration, login and session tokens.

Every error carries a client-safe ``message``; the HTTP layer maps each type to a
status code. Store and internal errors are logged with detail server-side and
reach the client only as an opaque 500.
"""


class AuthServiceError(Exception):
    """Base class for expected outcomes of the credential and token operations."""

    message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InputValidationError(AuthServiceError):
    """Missing or malformed required input (user correctable)."""

    message = "Missing required fields"


class DuplicateIdentityError(AuthServiceError):
    """Username or email is already taken by another account."""

    message = "User with this email or username already exists"


class InvalidCredentialsError(AuthServiceError):
    """Unknown identifier or wrong password. The two cases are deliberately identical."""

    message = "Invalid credentials"


class StoreUnavailableError(AuthServiceError):
    """Backing store unreachable or a store call timed out."""


class InternalError(AuthServiceError):
    """Anything unanticipated (including broken store invariants)."""


class TokenInvalidError(AuthServiceError):
    """Token signature, structure or claims are not valid."""

    message = "Invalid token"


class TokenExpiredError(TokenInvalidError):
    """Token signature is valid but its expiry is in the past."""

    message = "Token expired"
