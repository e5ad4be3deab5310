# minijira/auth/security.py
from datetime import UTC, datetime, timedelta

import bcrypt
from jose import JWTError, jwt

from minijira.core.config import Settings
from minijira.core.errors import AuthenticationFailed

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, hashed.encode("utf-8"))


def create_access_token(settings: Settings, *, user_id: int, email: str, role: str) -> str:
    expire = datetime.now(UTC) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {"sub": str(user_id), "email": email, "role": role, "exp": expire}
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(settings: Settings, token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise AuthenticationFailed("Invalid or expired token") from None
    if payload.get("sub") is None:
        raise AuthenticationFailed("Invalid or expired token")
    return payload
