# minijira/auth/services.py
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from minijira.auth.schemas import LoginRequest, RegisterRequest
from minijira.auth.security import MAX_PASSWORD_BYTES, create_access_token, hash_password, verify_password
from minijira.core.config import Settings
from minijira.core.errors import AuthenticationFailed, Conflict, ValidationFailed
from minijira.user.models import User

logger = logging.getLogger(__name__)


def _get_by_email(db: Session, email: str) -> User | None:
    return db.scalars(select(User).where(User.email == email)).first()


def register(db: Session, settings: Settings, payload: RegisterRequest) -> tuple[User, str]:
    if not payload.name or not payload.email or not payload.password:
        raise ValidationFailed("name, email and password are required")
    if len(payload.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationFailed(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    if _get_by_email(db, payload.email) is not None:
        raise Conflict("Email already in use", code="EMAIL_TAKEN")

    user = User(
        name=payload.name,
        email=payload.email,
        password=hash_password(payload.password),
        role=payload.role or "user",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    token = create_access_token(settings, user_id=user.id, email=user.email, role=user.role)
    return user, token


def login(db: Session, settings: Settings, payload: LoginRequest) -> tuple[User, str]:
    if not payload.email or not payload.password:
        raise ValidationFailed("email and password are required")
    user = _get_by_email(db, payload.email)
    if user is None or not verify_password(payload.password, user.password):
        logger.warning("Failed login for %s", payload.email)
        raise AuthenticationFailed("Invalid credentials", code="INVALID_CREDENTIALS")
    token = create_access_token(settings, user_id=user.id, email=user.email, role=user.role)
    return user, token
