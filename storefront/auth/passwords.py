"""
bcrypt password hashing.
"""
from functools import lru_cache

import bcrypt

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))


@lru_cache()
def dummy_hash() -> str:
    """Hash checked for unknown usernames so both failure paths cost the same."""
    return hash_password("storefront-dummy-password")


def verify_dummy_password(password: str) -> bool:
    """Spend one bcrypt check on a user that has no password hash; always False."""
    verify_password(password, dummy_hash())
    return False
