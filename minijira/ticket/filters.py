# minijira/ticket/filters.py
"""Ticket filter set and its translation into SQL conditions.

Every supplied dimension narrows the result (AND). Within the free-text
search the title and description are alternatives (OR).
"""
from dataclasses import dataclass

from sqlalchemy import or_

from minijira.core.ids import parse_id
from minijira.ticket.models import Ticket

UNASSIGNED = "unassigned"


@dataclass(frozen=True)
class TicketFilter:
    search: str | None = None
    status: str | None = None
    priority: str | None = None
    assignee_id: int | None = None
    unassigned: bool = False
    project_id: int | None = None

    @classmethod
    def from_query(
        cls,
        search: str | None = None,
        status: str | None = None,
        priority: str | None = None,
        assignee_id: str | None = None,
        project_id: str | None = None,
    ) -> "TicketFilter":
        # Empty query values mean "any", the same as leaving them out
        unassigned = assignee_id == UNASSIGNED
        return cls(
            search=search or None,
            status=status or None,
            priority=priority or None,
            assignee_id=parse_id(assignee_id, "assigneeId") if assignee_id and not unassigned else None,
            unassigned=unassigned,
            project_id=parse_id(project_id, "projectId") if project_id else None,
        )

    def conditions(self, case_sensitive: bool = True) -> list:
        clauses = []

        if self.search:
            if case_sensitive:
                clauses.append(or_(
                    Ticket.title.contains(self.search, autoescape=True),
                    Ticket.description.contains(self.search, autoescape=True),
                ))
            else:
                clauses.append(or_(
                    Ticket.title.icontains(self.search, autoescape=True),
                    Ticket.description.icontains(self.search, autoescape=True),
                ))
        if self.status:
            clauses.append(Ticket.status == self.status)
        if self.priority:
            clauses.append(Ticket.priority == self.priority)
        if self.unassigned:
            clauses.append(Ticket.assignee_id.is_(None))
        elif self.assignee_id is not None:
            clauses.append(Ticket.assignee_id == self.assignee_id)
        if self.project_id is not None:
            clauses.append(Ticket.project_id == self.project_id)

        return clauses
