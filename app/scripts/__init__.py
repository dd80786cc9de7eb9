"""Out-of-band admin CLIs (not reachable over HTTP)."""

import secrets
import string

PASSWORD_ALPHABET = string.ascii_letters + string.digits + "!@#$%^&*"


def generate_password(length: int = 20) -> str:
    """Random password drawn from a CSPRNG."""
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))
