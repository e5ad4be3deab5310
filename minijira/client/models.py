# minijira/client/models.py
"""Client-side views of the API records and the ticket filter set."""
from dataclasses import asdict, dataclass
from datetime import datetime

from minijira.core.schemas import CamelModel

UNASSIGNED = "unassigned"


class User(CamelModel):
    id: int
    name: str
    email: str
    role: str | None = None


class Project(CamelModel):
    id: int
    name: str
    key: str


class Ticket(CamelModel):
    id: int
    title: str
    description: str
    project_id: int
    assignee_id: int | None = None
    priority: str
    status: str
    created_at: datetime
    updated_at: datetime


class TicketDetail(Ticket):
    project: Project
    assignee: User | None = None


@dataclass(frozen=True)
class TicketFilters:
    """Five filter dimensions; an empty value means "any".

    ``assignee_id`` also takes the ``"unassigned"`` sentinel.
    """

    search: str = ""
    status: str = ""
    priority: str = ""
    assignee_id: str = ""
    project_id: str = ""

    def to_params(self) -> dict[str, str]:
        names = {"assignee_id": "assigneeId", "project_id": "projectId"}
        return {names.get(key, key): str(value) for key, value in asdict(self).items() if value}
