# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Central security module.  Credential hashing and random token generation
live here.  No other module should touch raw crypto directly.

Responsibilities
----------------
1. Password hashing / verification          (passlib pbkdf2_sha256)
2. Password-reset tokens                    (secrets, 32 bytes, hex)
3. Fallback document identifiers            (DOC-<year>-<4 digits>)
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from passlib.hash import pbkdf2_sha256 as _pbkdf2  # pure Python, no binary deps

from core.config import settings

# ---------------------------------------------------------------------------
# 1.  pbkdf2_sha256 – password hashing
# ---------------------------------------------------------------------------


def hash_password(plain: str) -> str:
    """
    Hash a plaintext password with PBKDF2-SHA256.

    The returned string is the full passlib hash (``$pbkdf2-sha256$...``);
    the salt and round count are embedded in it.
    """
    return _pbkdf2.using(rounds=settings.password_hash_rounds).hash(plain)


def verify_password(plain: str, stored_hash: str) -> bool:
    """
    Constant-time verification of *plain* against a hash produced by
    :func:`hash_password`.  A stored value that is not a pbkdf2_sha256 hash
    never verifies.
    """
    try:
        return _pbkdf2.verify(plain, stored_hash)
    except (ValueError, TypeError):
        return False


# ---------------------------------------------------------------------------
# 2.  Password-reset tokens
# ---------------------------------------------------------------------------


def generate_reset_token(now: Optional[datetime] = None) -> tuple[str, datetime]:
    """
    Return ``(token, expires_at)``.

    *token* is 32 random bytes rendered as 64 hex characters; *expires_at*
    is ``reset_token_expire_minutes`` after *now* (UTC).
    """
    now = now or datetime.now(timezone.utc)
    token = secrets.token_hex(32)
    return token, now + timedelta(minutes=settings.reset_token_expire_minutes)


# ---------------------------------------------------------------------------
# 3.  Document identifiers
# ---------------------------------------------------------------------------


def generate_document_id(now: Optional[datetime] = None) -> str:
    """
    Build an id in the shape the web client uses: ``DOC-2026-0417``.

    Only the last four digits of the millisecond clock are used, so ids are
    not guaranteed unique; the primary key catches collisions.
    """
    now = now or datetime.now(timezone.utc)
    millis = int(now.timestamp() * 1000)
    return f"DOC-{now.year}-{str(millis)[-4:]}"
