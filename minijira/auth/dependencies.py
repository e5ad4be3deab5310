# minijira/auth/dependencies.py
import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from minijira.auth.security import decode_access_token
from minijira.core.config import Settings, get_settings
from minijira.core.database import get_db
from minijira.core.errors import AuthenticationFailed
from minijira.user.models import User
from minijira.user.services import get_user

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    """Resolve the bearer token to a user or reject the request with 401."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationFailed("Missing or invalid Authorization header")

    payload = decode_access_token(settings, credentials.credentials)
    try:
        user_id = int(payload["sub"])
    except ValueError:
        raise AuthenticationFailed("Invalid or expired token") from None

    user = get_user(db, user_id)
    if user is None:
        logger.warning("Token for unknown user %s rejected", user_id)
        raise AuthenticationFailed("Invalid or expired token")
    return user
