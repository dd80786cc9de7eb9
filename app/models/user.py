"""ORM model for registered user accounts."""

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, String, func

from app.models.base import Base

ROLE_PARTNER = "partner"
ROLE_ADMIN = "admin"
ROLES = (ROLE_PARTNER, ROLE_ADMIN)


def _new_user_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    """
    Registered account: unique username and email, bcrypt password hash, role tag.

    role: 'partner' (default, every self-registered account) or 'admin' (seeded out of band)
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('partner', 'admin')", name="role"),
    )

    id = Column(String(32), primary_key=True, default=_new_user_id)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=ROLE_PARTNER)

    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    phone = Column(String(64), nullable=True)
    company_name = Column(String(255), nullable=True)
    address = Column(String(255), nullable=True)
    city = Column(String(255), nullable=True)
    zip = Column(String(32), nullable=True)
    country = Column(String(255), nullable=True)
    vat_id = Column(String(64), nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r} role={self.role}>"
