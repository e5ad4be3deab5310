# minijira/client/store.py
"""
Client-side ticket state.

Holds the active filter set, the last server-confirmed ticket list, the
user/project lookups and the ticket selected for editing. Mutations go to
the server and are followed by a full re-query; nothing is merged locally.
"""

import logging
from dataclasses import replace
from typing import NoReturn

from minijira.client.api import ApiClient, ApiError
from minijira.client.models import Project, Ticket, TicketFilters, User

logger = logging.getLogger(__name__)

LOAD_FAILED = "Failed to load tickets"
SAVE_FAILED = "Failed to save ticket"

UPDATABLE_FIELDS = {
    "title": "title",
    "description": "description",
    "priority": "priority",
    "status": "status",
    "assignee_id": "assigneeId",
    "project_id": "projectId",
}


class TicketStoreError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TicketStore:
    def __init__(self, api: ApiClient, filters: TicketFilters | None = None):
        self.api = api
        self.filters = filters or TicketFilters()
        self.tickets: list[Ticket] = []
        self.users: list[User] = []
        self.projects: list[Project] = []
        self.selected_ticket: Ticket | None = None
        self.error: str | None = None
        self._pending = 0
        self._issued = 0
        self._applied = 0

    @property
    def loading(self) -> bool:
        return self._pending > 0

    def start(self) -> None:
        """Load lookups once, then run the first ticket query."""
        self.load_lookups()
        self.refresh_tickets()

    def load_lookups(self) -> None:
        try:
            users = self.api.list_users()
            projects = self.api.list_projects()
        except ApiError as exc:
            self._fail(exc, "Failed to load users and projects")
        self.users = users
        self.projects = projects

    def refresh_tickets(self) -> list[Ticket]:
        self._issued += 1
        sequence = self._issued
        self._pending += 1
        try:
            tickets = self.api.list_tickets(self.filters)
        except ApiError as exc:
            self._fail(exc, LOAD_FAILED)
        finally:
            self._pending -= 1

        # A response older than one already applied is stale
        if sequence < self._applied:
            logger.debug("Dropping stale ticket list #%d (have #%d)", sequence, self._applied)
            return self.tickets
        self._applied = sequence
        self.tickets = tickets
        self.error = None
        return self.tickets

    def set_filters(self, filters: TicketFilters | None = None, **changes) -> list[Ticket]:
        """Replace (or partially change) the filters and re-query if they differ."""
        new_filters = filters if filters is not None else replace(self.filters, **changes)
        if new_filters == self.filters:
            return self.tickets
        self.filters = new_filters
        return self.refresh_tickets()

    def create_ticket(
        self,
        title: str,
        description: str,
        project_id: int | str,
        assignee_id: int | str | None = None,
        priority: str | None = None,
    ) -> Ticket:
        payload = {
            "title": title,
            "description": description,
            "projectId": project_id,
            "priority": priority or "Medium",
        }
        if assignee_id:
            payload["assigneeId"] = assignee_id
        try:
            created = self.api.create_ticket(payload)
        except ApiError as exc:
            self._fail(exc, SAVE_FAILED)
        self.refresh_tickets()
        return created

    def update_ticket(self, ticket_id: int, **changes) -> Ticket:
        """Send only the given fields; ``assignee_id=None`` unassigns."""
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise TypeError(f"Unknown ticket fields: {', '.join(sorted(unknown))}")
        payload = {UPDATABLE_FIELDS[name]: value for name, value in changes.items()}
        if "assigneeId" in payload and not payload["assigneeId"]:
            payload["assigneeId"] = None
        try:
            updated = self.api.update_ticket(ticket_id, payload)
        except ApiError as exc:
            self._fail(exc, SAVE_FAILED)
        self.selected_ticket = None
        self.refresh_tickets()
        return updated

    def select_ticket(self, ticket: Ticket | None) -> None:
        self.selected_ticket = ticket

    def cancel_edit(self) -> None:
        self.selected_ticket = None

    # Display helpers

    def user_name(self, user_id: int | None) -> str:
        if user_id is None:
            return "Unassigned"
        for user in self.users:
            if user.id == user_id:
                return user.name
        return str(user_id)

    def project_key(self, project_id: int) -> str:
        for project in self.projects:
            if project.id == project_id:
                return project.key
        return str(project_id)

    def ticket_key(self, ticket: Ticket) -> str:
        return f"{self.project_key(ticket.project_id)}-{ticket.id}"

    def _fail(self, exc: ApiError, fallback: str) -> NoReturn:
        self.error = exc.message or fallback
        raise TicketStoreError(self.error) from exc
