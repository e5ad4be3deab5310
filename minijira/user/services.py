# minijira/user/services.py
from sqlalchemy import select
from sqlalchemy.orm import Session
from minijira.core.ids import fits_id
from minijira.user.models import User

def list_users(db: Session) -> list[User]:
    return list(db.scalars(select(User).order_by(User.created_at.desc(), User.id.desc())))

def get_user(db: Session, user_id: int) -> User | None:
    if not fits_id(user_id):
        return None
    return db.get(User, user_id)
