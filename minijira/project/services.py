# minijira/project/services.py
import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from minijira.core.errors import Conflict
from minijira.core.ids import fits_id
from minijira.project.models import Project
from minijira.project.schemas import ProjectCreate, ProjectUpdate
from minijira.ticket.models import Ticket

logger = logging.getLogger(__name__)


def list_projects(db: Session) -> list[Project]:
    return list(db.scalars(select(Project).order_by(Project.created_at.desc(), Project.id.desc())))


def get_project(db: Session, project_id: int) -> Project | None:
    if not fits_id(project_id):
        return None
    return db.get(Project, project_id)


def _ensure_key_free(db: Session, key: str, exclude_id: int | None = None) -> None:
    stmt = select(Project.id).where(Project.key == key)
    if exclude_id is not None:
        stmt = stmt.where(Project.id != exclude_id)
    if db.scalars(stmt).first() is not None:
        raise Conflict(f"Project key {key} already in use", code="PROJECT_KEY_TAKEN")


def create_project(db: Session, payload: ProjectCreate) -> Project:
    _ensure_key_free(db, payload.key)
    db_project = Project(name=payload.name, key=payload.key)
    db.add(db_project)
    db.commit()
    db.refresh(db_project)
    logger.info("Created project %s (%s)", db_project.id, db_project.key)
    return db_project


def update_project(db: Session, project_id: int, payload: ProjectUpdate) -> Project | None:
    db_project = get_project(db, project_id)
    if not db_project:
        return None
    changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    if "key" in changes:
        _ensure_key_free(db, changes["key"], exclude_id=project_id)
    for field, value in changes.items():
        setattr(db_project, field, value)
    db.commit()
    db.refresh(db_project)
    return db_project


def delete_project(db: Session, project_id: int) -> Project | None:
    db_project = get_project(db, project_id)
    if not db_project:
        return None
    # Tickets must always point at an existing project
    referencing = db.scalar(select(func.count(Ticket.id)).where(Ticket.project_id == project_id))
    if referencing:
        raise Conflict(
            f"Project still has {referencing} ticket(s)",
            code="PROJECT_HAS_TICKETS",
        )
    db.delete(db_project)
    db.commit()
    logger.info("Deleted project %s", project_id)
    return db_project
