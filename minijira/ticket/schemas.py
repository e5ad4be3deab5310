# minijira/ticket/schemas.py
from datetime import datetime

from pydantic import StrictInt

from minijira.core.schemas import CamelModel
from minijira.project.schemas import ProjectOut
from minijira.user.schemas import UserOut

# Identifiers arrive as JSON numbers or numeric strings; "" / null clear an assignee
IdValue = StrictInt | str | None


class TicketCreate(CamelModel):
    title: str | None = None
    description: str | None = None
    project_id: IdValue = None
    assignee_id: IdValue = None
    priority: str | None = None
    # Accepted but ignored: new tickets always start Open
    status: str | None = None


class TicketUpdate(CamelModel):
    title: str | None = None
    description: str | None = None
    priority: str | None = None
    status: str | None = None
    assignee_id: IdValue = None
    project_id: IdValue = None


class TicketOut(CamelModel):
    id: int
    title: str
    description: str
    project_id: int
    assignee_id: int | None
    priority: str
    status: str
    created_at: datetime
    updated_at: datetime


class TicketDetailOut(TicketOut):
    project: ProjectOut
    assignee: UserOut | None = None
