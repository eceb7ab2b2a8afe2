"""
bcrypt helpers for the configured admin password.

ADMIN_PASSWORD should hold a bcrypt hash (generate one with
`landora-admin hash-password`). A plain-text value is still accepted for
backward compatibility: it is hashed once per process and the hash is cached.
"""

import logging
import threading
from typing import Optional

import bcrypt

from landora_admin.errors import ConfigurationError

logger = logging.getLogger(__name__)

BCRYPT_PREFIX = "$2"
DEFAULT_ROUNDS = 12


def is_bcrypt_hash(value: str) -> bool:
    return value.startswith(BCRYPT_PREFIX)


def hash_password(plain: str, rounds: int = DEFAULT_ROUNDS) -> str:
    try:
        hashed = bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    except ValueError as exc:
        # bcrypt refuses inputs longer than 72 bytes
        raise ConfigurationError(f"password cannot be hashed: {exc}") from exc
    return hashed.decode("ascii")


def check_password(candidate: str, hashed: str) -> bool:
    """bcrypt.checkpw, returning False for malformed hashes or over-long input."""
    try:
        return bcrypt.checkpw(candidate.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


class AdminPasswordResolver:
    """Turns the configured password into a bcrypt hash, caching plain-text hashes."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        self._cached_raw: Optional[str] = None
        self._cached_hash: Optional[str] = None
        self._lock = threading.Lock()

    def resolve(self, configured: str) -> str:
        if not configured:
            raise ConfigurationError("admin password is not configured")
        if is_bcrypt_hash(configured):
            return configured

        with self._lock:
            if self._cached_raw != configured or self._cached_hash is None:
                logger.warning(
                    "ADMIN_PASSWORD is plain text; store a bcrypt hash instead "
                    "(landora-admin hash-password)."
                )
                self._cached_hash = hash_password(configured, self.rounds)
                self._cached_raw = configured
            return self._cached_hash

    def verify(self, candidate: str, configured: str) -> bool:
        return check_password(candidate, self.resolve(configured))
