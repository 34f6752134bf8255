"""JWT issuing and single-use mailed token helpers."""

import hashlib
import secrets
from datetime import timedelta
from typing import NamedTuple, Optional

import jwt
from django.conf import settings
from django.utils import timezone

JWT_ALGORITHM = "HS256"

VERIFICATION_TOKEN_TTL = timedelta(hours=24)
RESET_TOKEN_TTL = timedelta(hours=1)


class ExpiringToken(NamedTuple):
    raw: str
    hashed: str
    expire: object


def generate_token(user_id, expire_days: Optional[int] = None) -> str:
    """Sign an HS256 JWT carrying the user id."""
    days = settings.JWT_EXPIRE_DAYS if expire_days is None else expire_days
    now = timezone.now()
    payload = {
        "id": user_id,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(days=days)).timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """Verify signature and expiry; raises jwt.InvalidTokenError on failure."""
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[JWT_ALGORITHM])


def generate_raw_token(nbytes: int = 32) -> str:
    return secrets.token_hex(nbytes)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def create_expiring_token_pair(ttl: timedelta = RESET_TOKEN_TTL) -> ExpiringToken:
    """Return a raw token to mail, its hash to store, and the expiry time."""
    raw = generate_raw_token()
    return ExpiringToken(raw=raw, hashed=hash_token(raw), expire=timezone.now() + ttl)
