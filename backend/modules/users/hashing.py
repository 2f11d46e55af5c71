"""
Password hashing with bcrypt.
"""

from typing import Optional

import bcrypt

from shared.config import get_settings

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class BcryptPasswordHasher:
    """IPasswordHasher backed by bcrypt with a configurable cost factor."""

    def __init__(self, rounds: Optional[int] = None):
        self._rounds = rounds if rounds is not None else get_settings().bcrypt_rounds

    def hash(self, raw: str) -> str:
        pw_bytes = raw.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")

    def matches(self, raw: str, hashed: str) -> bool:
        pw_bytes = raw.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            # Malformed stored hash
            return False
