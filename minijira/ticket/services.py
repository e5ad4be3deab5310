# minijira/ticket/services.py
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from minijira.core.clock import next_timestamp, utcnow
from minijira.core.errors import ValidationFailed
from minijira.core.ids import fits_id, parse_id
from minijira.project.models import Project
from minijira.ticket.filters import TicketFilter
from minijira.ticket.models import PRIORITIES, STATUSES, Priority, Ticket, TicketStatus
from minijira.ticket.schemas import TicketCreate, TicketUpdate
from minijira.user.models import User

logger = logging.getLogger(__name__)


def list_tickets(db: Session, filters: TicketFilter, case_sensitive: bool = True) -> list[Ticket]:
    stmt = (
        select(Ticket)
        .where(*filters.conditions(case_sensitive=case_sensitive))
        .order_by(Ticket.updated_at.desc(), Ticket.id.desc())
    )
    return list(db.scalars(stmt))


def get_ticket(db: Session, ticket_id: int) -> Ticket | None:
    if not fits_id(ticket_id):
        return None
    stmt = (
        select(Ticket)
        .options(joinedload(Ticket.project), joinedload(Ticket.assignee))
        .where(Ticket.id == ticket_id)
    )
    return db.scalars(stmt).first()


def _check_priority(priority: str | None) -> None:
    if priority and priority not in PRIORITIES:
        raise ValidationFailed(f"priority must be one of {', '.join(PRIORITIES)}")


def _check_status(status: str | None) -> None:
    if status and status not in STATUSES:
        raise ValidationFailed(f"status must be one of {', '.join(STATUSES)}")


def _resolve_project(db: Session, value) -> int:
    project_id = parse_id(value, "projectId")
    if db.get(Project, project_id) is None:
        raise ValidationFailed("projectId is invalid")
    return project_id


def _resolve_assignee(db: Session, value) -> int | None:
    """Empty or null clears the assignee; anything else must name an existing user."""
    if value is None or value == "":
        return None
    assignee_id = parse_id(value, "assigneeId")
    if db.get(User, assignee_id) is None:
        raise ValidationFailed("assigneeId is invalid")
    return assignee_id


def create_ticket(db: Session, payload: TicketCreate) -> Ticket:
    if not payload.title or not payload.description or payload.project_id in (None, ""):
        raise ValidationFailed("title, description and projectId are required")
    _check_priority(payload.priority)
    project_id = _resolve_project(db, payload.project_id)
    assignee_id = _resolve_assignee(db, payload.assignee_id)

    now = utcnow()
    db_ticket = Ticket(
        title=payload.title,
        description=payload.description,
        project_id=project_id,
        assignee_id=assignee_id,
        priority=payload.priority or Priority.MEDIUM.value,
        status=TicketStatus.OPEN.value,
        created_at=now,
        updated_at=now,
    )
    db.add(db_ticket)
    db.commit()
    db.refresh(db_ticket)
    logger.info("Created ticket %s in project %s", db_ticket.id, project_id)
    return db_ticket


def update_ticket(db: Session, ticket_id: int, payload: TicketUpdate) -> Ticket | None:
    changes = payload.model_dump(exclude_unset=True)

    _check_priority(changes.get("priority"))
    _check_status(changes.get("status"))
    for field in ("title", "description"):
        if field in changes and not changes[field]:
            raise ValidationFailed(f"{field} must not be empty")
    # null for enums means "leave as is"; they are never nullable
    for field in ("priority", "status"):
        if field in changes and not changes[field]:
            del changes[field]
    if "assignee_id" in changes:
        changes["assignee_id"] = _resolve_assignee(db, changes["assignee_id"])
    if "project_id" in changes:
        if changes["project_id"] in (None, ""):
            raise ValidationFailed("projectId is invalid")
        changes["project_id"] = _resolve_project(db, changes["project_id"])

    db_ticket = db.get(Ticket, ticket_id) if fits_id(ticket_id) else None
    if not db_ticket:
        return None
    for field, value in changes.items():
        setattr(db_ticket, field, value)
    db_ticket.updated_at = next_timestamp(db_ticket.updated_at)
    db.commit()
    db.refresh(db_ticket)
    logger.info("Updated ticket %s fields=%s", ticket_id, sorted(changes))
    return db_ticket


def delete_ticket(db: Session, ticket_id: int) -> Ticket | None:
    db_ticket = db.get(Ticket, ticket_id) if fits_id(ticket_id) else None
    if not db_ticket:
        return None
    db.delete(db_ticket)
    db.commit()
    logger.info("Deleted ticket %s", ticket_id)
    return db_ticket
