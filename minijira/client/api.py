# minijira/client/api.py
"""
Thin HTTP client for the Mini Jira API.

Wraps an ``httpx.Client`` so callers (and tests) decide the transport.
Every request carries the bearer token once one is known.
"""

import logging
from typing import Any

import httpx

from minijira.client.config import ClientSettings
from minijira.client.models import Project, Ticket, TicketDetail, TicketFilters, User

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Request failed; ``message`` is whatever the server said, possibly empty."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message or "Request failed")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()
    if isinstance(body, dict):
        for key in ("message", "detail"):
            if isinstance(body.get(key), str):
                return body[key]
    return response.text.strip()


class ApiClient:
    def __init__(self, http: httpx.Client, token: str | None = None, prefix: str = "/api"):
        self._http = http
        self.token = token
        self.prefix = prefix.rstrip("/")

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> "ApiClient":
        http = httpx.Client(base_url=settings.API_URL.rstrip("/"), timeout=settings.TIMEOUT)
        return cls(http, token=settings.TOKEN, prefix=settings.API_PREFIX)

    def close(self) -> None:
        self._http.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        url = f"{self.prefix}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self._http.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ApiError(str(exc)) from exc
        if response.is_error:
            message = _error_message(response)
            logger.warning("%s %s -> %s %s", method, url, response.status_code, message)
            raise ApiError(message, response.status_code)
        return response.json()

    # Auth

    def login(self, email: str, password: str) -> User:
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.token = data["token"]
        return User.model_validate(data["user"])

    # Lookups

    def list_users(self) -> list[User]:
        return [User.model_validate(u) for u in self._request("GET", "/users")]

    def list_projects(self) -> list[Project]:
        return [Project.model_validate(p) for p in self._request("GET", "/projects")]

    # Tickets

    def list_tickets(self, filters: TicketFilters) -> list[Ticket]:
        rows = self._request("GET", "/tickets", params=filters.to_params())
        return [Ticket.model_validate(t) for t in rows]

    def get_ticket(self, ticket_id: int) -> TicketDetail:
        return TicketDetail.model_validate(self._request("GET", f"/tickets/{ticket_id}"))

    def create_ticket(self, payload: dict[str, Any]) -> Ticket:
        return Ticket.model_validate(self._request("POST", "/tickets", json=payload))

    def update_ticket(self, ticket_id: int, payload: dict[str, Any]) -> Ticket:
        return Ticket.model_validate(self._request("PATCH", f"/tickets/{ticket_id}", json=payload))

    def delete_ticket(self, ticket_id: int) -> Ticket:
        return Ticket.model_validate(self._request("DELETE", f"/tickets/{ticket_id}"))
