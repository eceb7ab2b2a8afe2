"""
Admin session tokens for Landora.

Token format: base64url(JSON payload) + "." + base64url(HMAC-SHA256 signature),
where the signature is computed over the encoded payload text.
Tokens are stateless: nothing is stored server-side, and only a holder of
ADMIN_AUTH_SECRET can mint or validate one.
"""

import base64
import binascii
import hashlib
import hmac
import json
import re
import secrets
import time
from typing import Optional

from pydantic import ValidationError

from landora_admin.errors import ConfigurationError, DecodeError
from landora_admin.schemas import SessionPayload, SessionVerification

# ── Constants ──
COOKIE_NAME: str = "admin_session"  # exported so main.py can import it
SESSION_TYPE: str = "admin"
SESSION_VERSION: int = 1
DEFAULT_TTL_SECONDS: int = 60 * 60 * 8  # 8 hours

_B64URL_RE = re.compile(r"^[A-Za-z0-9_-]*$")


# ── Codec ──

def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def b64url_decode(text: str) -> bytes:
    """Decode unpadded base64url text. Raises DecodeError on malformed input."""
    if not _B64URL_RE.match(text):
        raise DecodeError("token component contains non-base64url characters")
    if len(text) % 4 == 1:
        raise DecodeError("token component has an impossible length")
    padded = text + "=" * (-len(text) % 4)
    try:
        return base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(str(exc)) from exc


def _invalid() -> SessionVerification:
    return SessionVerification(valid=False)


def _now() -> int:
    return int(time.time())


def _signature(secret: str, encoded_payload: str) -> bytes:
    return hmac.new(
        secret.encode("utf-8"),
        encoded_payload.encode("ascii"),
        hashlib.sha256,
    ).digest()


# ── Signer / Verifier ──

def sign_admin_session(
    secret: str,
    ttl_seconds: int = DEFAULT_TTL_SECONDS,
    now: Optional[int] = None,
) -> str:
    """Mint a fresh admin session token valid for `ttl_seconds`."""
    if not secret:
        raise ConfigurationError("signing secret is empty")
    if ttl_seconds <= 0:
        raise ConfigurationError("session ttl must be positive")

    issued_at = _now() if now is None else int(now)
    payload = SessionPayload(
        type=SESSION_TYPE,
        version=SESSION_VERSION,
        issued_at=issued_at,
        expires_at=issued_at + ttl_seconds,
    )
    body = json.dumps(payload.model_dump(by_alias=True), separators=(",", ":"))
    encoded_payload = b64url_encode(body.encode("utf-8"))
    encoded_sig = b64url_encode(_signature(secret, encoded_payload))
    return f"{encoded_payload}.{encoded_sig}"


def verify_admin_session(
    token: Optional[str],
    secret: str,
    now: Optional[int] = None,
) -> SessionVerification:
    """Check signature, schema and expiry. Never raises."""
    if not token or not secret:
        return _invalid()

    parts = token.split(".")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        return _invalid()
    encoded_payload, encoded_sig = parts

    try:
        received = b64url_decode(encoded_sig)
        expected = _signature(secret, encoded_payload)
    except (DecodeError, UnicodeEncodeError):
        return _invalid()
    if not secrets.compare_digest(received, expected):
        return _invalid()

    try:
        raw = json.loads(b64url_decode(encoded_payload).decode("utf-8"))
        payload = SessionPayload.model_validate(raw)
    except (DecodeError, ValueError, ValidationError):
        return _invalid()

    if payload.type != SESSION_TYPE or payload.version != SESSION_VERSION:
        return _invalid()

    current = _now() if now is None else int(now)
    if payload.expires_at < current:
        return _invalid()

    return SessionVerification(valid=True, payload=payload)
