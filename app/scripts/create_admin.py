"""
Create the first admin account (admins cannot self-register). Run from project root:
  python -m app.scripts.create_admin [--username admin] [--email admin@netvoya.com] [--password PASSWORD]
Without --password a random one is generated and printed once.
"""
import argparse
import logging
import sys

from sqlalchemy.exc import IntegrityError

from app.core.database import SessionLocal
from app.core.security import PASSWORD_MAX_LEN, USERNAME_MAX_LEN, hash_password
from app.models.user import ROLE_ADMIN, User
from app.scripts import generate_password

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_EMAIL = "admin@netvoya.com"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a NetVoya admin user (out of band).")
    parser.add_argument("--username", default=DEFAULT_ADMIN_USERNAME)
    parser.add_argument("--email", default=DEFAULT_ADMIN_EMAIL)
    parser.add_argument("--password", default=None, help="Generated when omitted")
    args = parser.parse_args(argv)

    username = args.username.strip()
    email = args.email.strip()
    if not username or len(username) > USERNAME_MAX_LEN or not email:
        print("Invalid username or email.", file=sys.stderr)
        return 1
    password = args.password or generate_password()
    if len(password) > PASSWORD_MAX_LEN:
        print(f"Password must be at most {PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            print(f"Admin user '{email}' already exists (password is unchanged).")
            return 0
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=ROLE_ADMIN,
            first_name="System",
            last_name="Admin",
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            print(f"Username '{username}' is already taken.", file=sys.stderr)
            return 1
        logger.info("Admin user created: id=%s email=%s", user.id, email)
        print(f"Created admin user '{username}' <{email}>.")
        if args.password is None:
            print(f"Password: {password}")
            print("Save this password now. It will not be shown again.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    sys.exit(main())
