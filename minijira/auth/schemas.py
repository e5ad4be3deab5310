# minijira/auth/schemas.py
from minijira.core.schemas import CamelModel
from minijira.user.schemas import UserOut


class RegisterRequest(CamelModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None


class LoginRequest(CamelModel):
    email: str | None = None
    password: str | None = None


class AuthOut(CamelModel):
    user: UserOut
    token: str
