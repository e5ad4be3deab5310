# minijira/auth/routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from minijira.auth import services as auth_service
from minijira.auth.dependencies import get_current_user
from minijira.auth.schemas import AuthOut, LoginRequest, RegisterRequest
from minijira.core.config import Settings, get_settings
from minijira.core.database import get_db
from minijira.user.models import User
from minijira.user.schemas import UserOut

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=AuthOut, status_code=201)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    user, token = auth_service.register(db, settings, payload)
    return AuthOut(user=UserOut.model_validate(user), token=token)


@router.post("/login", response_model=AuthOut)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    user, token = auth_service.login(db, settings, payload)
    return AuthOut(user=UserOut.model_validate(user), token=token)


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)):
    return current_user
