# minijira/user/routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from minijira.auth.dependencies import get_current_user
from minijira.core.database import get_db
from minijira.core.errors import NotFound
from minijira.user.schemas import UserOut
from minijira.user import services as user_service

router = APIRouter(prefix="/users", tags=["Users"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=list[UserOut])
def list_all(db: Session = Depends(get_db)):
    return user_service.list_users(db)


@router.get("/{user_id}", response_model=UserOut)
def get(user_id: int, db: Session = Depends(get_db)):
    user = user_service.get_user(db, user_id)
    if not user:
        raise NotFound("User not found", code="USER_NOT_FOUND")
    return user
