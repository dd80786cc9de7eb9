"""Password hashing and session token issuing/verification."""

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

from app.core.config import settings
from app.core.exceptions import TokenExpiredError, TokenInvalidError

if TYPE_CHECKING:
    from app.models.user import User

# Bcrypt cost (rounds). Fixed so hashes stay compatible with existing records.
BCRYPT_ROUNDS = 10

# Session tokens are valid for a fixed window; there is no refresh or revocation.
TOKEN_TTL = timedelta(hours=24)

# Claims every session token must carry.
TOKEN_CLAIMS = ("id", "email", "role")

# Input validation limits for registration and login.
USERNAME_MAX_LEN = 255
EMAIL_MAX_LEN = 255
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


# Compared against when the identifier is unknown so both login failures cost one bcrypt check.
DUMMY_PASSWORD_HASH = hash_password("netvoya-dummy-password")


def _secret(secret: str | None) -> str:
    return secret if secret is not None else settings.JWT_SECRET.get_secret_value()


def create_access_token(
    user: "User",
    *,
    now: datetime | None = None,
    secret: str | None = None,
) -> str:
    """Issue a signed session token for an authenticated user: id, email, role, iat, exp."""
    issued_at = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        "id": str(user.id),
        "email": user.email,
        "role": user.role,
        "iat": issued_at,
        "exp": issued_at + TOKEN_TTL,
    }
    return jwt.encode(payload, _secret(secret), algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, *, secret: str | None = None) -> dict[str, Any]:
    """
    Verify signature and expiry; return the decoded claims (id, email, role, iat, exp).
    Raises TokenExpiredError when expired and TokenInvalidError for anything else.
    """
    try:
        payload = jwt.decode(
            token,
            _secret(secret),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", *TOKEN_CLAIMS]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError() from e
    except jwt.PyJWTError as e:
        raise TokenInvalidError() from e
    return payload
