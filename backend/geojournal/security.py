"""
GeoJournal Backend — Password Hashing
======================================

What:  bcrypt helpers used by signup and login.
Why:   Passwords are stored as salted one-way hashes and verified with
       `bcrypt.checkpw`, which compares in constant time.

bcrypt only reads the first 72 bytes of its input; longer passwords are cut
at that boundary explicitly because newer bcrypt releases reject them.
"""

import bcrypt

from geojournal.config import settings

_BCRYPT_MAX_BYTES = 72


def _encode(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(plain_password: str) -> str:
    """Hash a plaintext password with a fresh salt."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_encode(plain_password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plaintext password against a stored hash."""
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


# Verified against when the email is unknown, so a failed login costs the
# same whether or not the account exists.
DUMMY_PASSWORD_HASH = hash_password("geojournal-dummy-password")
