"""Credential store gateway: register, authenticate and list user accounts."""

import logging
from collections.abc import Callable
from typing import TypeVar

from pydantic.alias_generators import to_camel
from sqlalchemy import or_
from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    DuplicateIdentityError,
    InputValidationError,
    InternalError,
    InvalidCredentialsError,
    StoreUnavailableError,
)
from app.core.security import (
    DUMMY_PASSWORD_HASH,
    EMAIL_MAX_LEN,
    PASSWORD_MAX_LEN,
    USERNAME_MAX_LEN,
    hash_password,
    verify_password,
)
from app.models.user import ROLE_PARTNER, User
from app.schemas.auth import RegisterRequest, UserListItem

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Driver/pool failures that mean the store is unreachable or too slow, not that the request is bad.
STORE_UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError)

PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "phone",
    "company_name",
    "address",
    "city",
    "zip",
    "country",
    "vat_id",
)

# Same bounds as the VARCHAR columns so over-long input is a 400, not a failed insert.
PROFILE_FIELD_MAX_LENS = {name: User.__table__.c[name].type.length for name in PROFILE_FIELDS}


def _run(db: Session, operation: str, fn: Callable[[], T]) -> T:
    """Run a store call, translating driver failures into the service error taxonomy."""
    try:
        return fn()
    except STORE_UNAVAILABLE_ERRORS as e:
        db.rollback()
        logger.exception("Store unavailable during %s", operation)
        raise StoreUnavailableError() from e
    except IntegrityError:
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Unexpected store error during %s", operation)
        raise InternalError() from e


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _find_by_identity(db: Session, *values: str) -> list[User]:
    """Records whose username or email equals any of the given values (at most two)."""
    return (
        db.query(User)
        .filter(or_(User.username.in_(values), User.email.in_(values)))
        .limit(2)
        .all()
    )


def register_user(db: Session, candidate: RegisterRequest) -> User:
    """
    Create a partner account from a registration request.

    The caller-supplied role is never used. Raises InputValidationError when username,
    email or password is missing, DuplicateIdentityError when the username or email is
    taken (by the early lookup or by the unique indexes at insert time), and
    StoreUnavailableError when the store cannot be reached.
    """
    username = _clean(candidate.username)
    email = _clean(candidate.email)
    password = candidate.password
    if not username or not email or not password:
        raise InputValidationError()
    if len(username) > USERNAME_MAX_LEN or len(email) > EMAIL_MAX_LEN:
        raise InputValidationError("Username or email is too long")
    if len(password) > PASSWORD_MAX_LEN:
        raise InputValidationError("Password is too long")

    profile = {name: _clean(getattr(candidate, name)) for name in PROFILE_FIELDS}
    for name, value in profile.items():
        if value is not None and len(value) > PROFILE_FIELD_MAX_LENS[name]:
            raise InputValidationError(f"{to_camel(name)} is too long")

    # Cross-field check so that one login identifier can never match two accounts.
    existing = _run(db, "register", lambda: _find_by_identity(db, username, email))
    if existing:
        logger.info("Registration rejected: identity already taken (email=%s)", email)
        raise DuplicateIdentityError()

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        role=ROLE_PARTNER,
        **profile,
    )

    def _insert() -> User:
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    try:
        created = _run(db, "register", _insert)
    except IntegrityError as e:
        # Lost a race with a concurrent registration; the unique index decided.
        db.rollback()
        logger.info("Registration rejected by unique index (email=%s)", email)
        raise DuplicateIdentityError() from e

    logger.info("New user registered: id=%s email=%s", created.id, created.email)
    return created


def authenticate_user(db: Session, identifier: str | None, password: str | None) -> User:
    """
    Return the account whose username or email equals identifier and whose password matches.

    Unknown identifier and wrong password both raise InvalidCredentialsError with the same
    message, and both cost one bcrypt comparison. Performs no writes.
    """
    identifier = _clean(identifier)
    if not identifier or not password:
        raise InputValidationError("Email and password are required")

    matches = _run(db, "login", lambda: _find_by_identity(db, identifier))
    if not matches:
        verify_password(password, DUMMY_PASSWORD_HASH)
        logger.warning("Login failed: unknown identifier")
        raise InvalidCredentialsError()
    if len(matches) > 1:
        # Registration rejects cross-field collisions, so this means the store was edited out of band.
        logger.error(
            "Login identifier matches %d accounts: ids=%s",
            len(matches),
            [u.id for u in matches],
        )
        raise InternalError()

    user = matches[0]
    if not verify_password(password, user.password_hash or ""):
        logger.warning("Login failed: wrong password for id=%s", user.id)
        raise InvalidCredentialsError()

    logger.info("User logged in: id=%s email=%s", user.id, user.email)
    return user


def list_public_users(db: Session) -> list[UserListItem]:
    """All accounts, oldest first, without password hashes."""
    users = _run(
        db,
        "list users",
        lambda: db.query(User).order_by(User.created_at, User.id).all(),
    )
    return [UserListItem.model_validate(u) for u in users]
