"""
Security utilities for password hashing and signed session cookies.
"""
from functools import lru_cache
from typing import Optional
import hashlib
import secrets
import bcrypt
from jose import JWTError, jwt
from weeklydiary.core.config import settings


def _pre_hash_password(password: str) -> bytes:
    """
    Pre-hash password with SHA256 to support passwords longer than 72 bytes.
    Returns bytes (32 bytes) which is well under bcrypt's 72-byte limit.
    """
    return hashlib.sha256(password.encode('utf-8')).digest()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    pre_hashed = _pre_hash_password(plain_password)
    try:
        return bcrypt.checkpw(pre_hashed, hashed_password.encode('utf-8'))
    except ValueError:
        # Malformed stored hash
        return False


def get_password_hash(password: str) -> str:
    """
    Hash a password.
    Pre-hashes with SHA256 first to support longer passwords, then bcrypt with a fresh salt.
    """
    pre_hashed = _pre_hash_password(password)
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(pre_hashed, salt)
    return hashed.decode('utf-8')


@lru_cache(maxsize=1)
def dummy_password_hash() -> str:
    """Hash compared against when the user does not exist, so both login failures cost a bcrypt check."""
    return get_password_hash(secrets.token_hex(16))


def generate_session_id() -> str:
    return secrets.token_hex(32)


def sign_session_id(session_id: str) -> str:
    """Wrap a session id in an HS256 token so the cookie cannot be forged or altered."""
    return jwt.encode({"sid": session_id}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def unsign_session_id(token: str) -> Optional[str]:
    """Return the session id carried by a signed cookie value, or None if the signature is bad."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    sid = payload.get("sid")
    return sid if isinstance(sid, str) and sid else None
