# minijira/project/schemas.py
from datetime import datetime

from pydantic import Field

from minijira.core.schemas import CamelModel


class ProjectCreate(CamelModel):
    name: str = Field(..., min_length=1)
    key: str = Field(..., min_length=1, max_length=10)


class ProjectUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1)
    key: str | None = Field(default=None, min_length=1, max_length=10)


class ProjectOut(CamelModel):
    id: int
    name: str
    key: str
    created_at: datetime
