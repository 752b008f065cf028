"""Master password generation."""

from __future__ import annotations

import os
import secrets
import string

DEFAULT_PASSWORD_LENGTH = int(os.getenv("PASSWORD_LENGTH", "27"))

# RDS rejects '/', '@', '"' and spaces in master passwords
PASSWORD_CHARACTERS = string.ascii_letters + string.digits


def generate_password(length: int = DEFAULT_PASSWORD_LENGTH) -> str:
    """Generate a cryptographically strong random password.

    Args:
        length: Number of characters

    Returns:
        Random alphanumeric password

    Raises:
        ValueError: If length is not positive
    """
    if length <= 0:
        raise ValueError(f"password length must be positive, got {length}")
    return "".join(secrets.choice(PASSWORD_CHARACTERS) for _ in range(length))
