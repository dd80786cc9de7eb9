"""
Reset an account's password to a new random one (out-of-band admin tool). Run from project root:
  python -m app.scripts.reset_password [--email admin@netvoya.com]
"""
import argparse
import logging
import sys

from app.core.database import SessionLocal
from app.core.security import hash_password
from app.models.user import User
from app.scripts import generate_password
from app.scripts.create_admin import DEFAULT_ADMIN_EMAIL

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Reset a NetVoya user's password.")
    parser.add_argument("--email", default=DEFAULT_ADMIN_EMAIL)
    parser.add_argument("--length", type=int, default=20, help="Generated password length")
    args = parser.parse_args(argv)

    if args.length < 12 or args.length > 128:
        print("Password length must be between 12 and 128.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == args.email.strip()).first()
        if user is None:
            print(f"User {args.email} not found.", file=sys.stderr)
            return 1
        new_password = generate_password(args.length)
        user.password_hash = hash_password(new_password)
        db.commit()
        logger.info("Password reset for id=%s", user.id)
        print(f"Password reset for {user.email}.")
        print(f"Password: {new_password}")
        print("Save this password now. It will not be shown again.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    sys.exit(main())
