# minijira/ticket/routes.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from minijira.auth.dependencies import get_current_user
from minijira.core.config import Settings, get_settings
from minijira.core.database import get_db
from minijira.core.errors import NotFound
from minijira.ticket.filters import TicketFilter
from minijira.ticket.schemas import TicketCreate, TicketDetailOut, TicketOut, TicketUpdate
from minijira.ticket import services as ticket_service

router = APIRouter(
    prefix="/tickets",
    tags=["Tickets"],
    dependencies=[Depends(get_current_user)],
)


def _not_found() -> NotFound:
    return NotFound("Ticket not found", code="TICKET_NOT_FOUND")


@router.get("", response_model=list[TicketOut])
def list_all(
    search: str | None = Query(default=None, description="Substring of title or description"),
    status: str | None = Query(default=None),
    priority: str | None = Query(default=None),
    assignee_id: str | None = Query(default=None, alias="assigneeId", description="User id or 'unassigned'"),
    project_id: str | None = Query(default=None, alias="projectId"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    filters = TicketFilter.from_query(
        search=search,
        status=status,
        priority=priority,
        assignee_id=assignee_id,
        project_id=project_id,
    )
    return ticket_service.list_tickets(db, filters, case_sensitive=settings.SEARCH_CASE_SENSITIVE)


@router.post("", response_model=TicketOut, status_code=201)
def create(ticket: TicketCreate, db: Session = Depends(get_db)):
    return ticket_service.create_ticket(db, ticket)


@router.get("/{ticket_id}", response_model=TicketDetailOut)
def get(ticket_id: int, db: Session = Depends(get_db)):
    ticket = ticket_service.get_ticket(db, ticket_id)
    if not ticket:
        raise _not_found()
    return ticket


@router.patch("/{ticket_id}", response_model=TicketOut)
def update(ticket_id: int, ticket: TicketUpdate, db: Session = Depends(get_db)):
    updated = ticket_service.update_ticket(db, ticket_id, ticket)
    if not updated:
        raise _not_found()
    return updated


@router.delete("/{ticket_id}", response_model=TicketOut)
def delete(ticket_id: int, db: Session = Depends(get_db)):
    deleted = ticket_service.delete_ticket(db, ticket_id)
    if not deleted:
        raise _not_found()
    return deleted
