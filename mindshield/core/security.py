"""
Password hashing and bearer tokens.

Passwords are SHA-256 digested before bcrypt so inputs past bcrypt's
72-byte window still count. Tokens are signed JWTs carrying the user's id
and name; login is the only issuer.
"""
from datetime import timedelta
from typing import Optional
import hashlib
import bcrypt
from jose import JWTError, jwt
from mindshield.core.config import settings
from mindshield.core.utils import utcnow


def _digest(password: str) -> bytes:
    return hashlib.sha256(password.encode("utf-8")).digest()


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(_digest(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_digest(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(user_id: int, name: str, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a token for a logged-in user; lifetime defaults to ACCESS_TOKEN_EXPIRE_DAYS."""
    issued = utcnow()
    expires = issued + (expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS))
    claims = {"sub": name, "user_id": user_id, "iat": issued, "exp": expires}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Verified claims of a token, or None when it is invalid or expired."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None


def get_token_user_id(token: str) -> Optional[int]:
    """User id a token was issued for, or None."""
    claims = decode_access_token(token)
    if not claims:
        return None
    user_id = claims.get("user_id")
    return user_id if isinstance(user_id, int) else None
