# minijira/user/schemas.py
from datetime import datetime

from minijira.core.schemas import CamelModel


class UserOut(CamelModel):
    id: int
    name: str
    email: str
    role: str
    created_at: datetime
