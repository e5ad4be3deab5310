# minijira/project/routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from minijira.auth.dependencies import get_current_user
from minijira.core.database import get_db
from minijira.core.errors import NotFound
from minijira.project.schemas import ProjectCreate, ProjectOut, ProjectUpdate
from minijira.project import services as project_service

router = APIRouter(prefix="/projects", tags=["Projects"], dependencies=[Depends(get_current_user)])


def _not_found() -> NotFound:
    return NotFound("Project not found", code="PROJECT_NOT_FOUND")


@router.get("", response_model=list[ProjectOut])
def list_all(db: Session = Depends(get_db)):
    return project_service.list_projects(db)


@router.post("", response_model=ProjectOut, status_code=201)
def create(project: ProjectCreate, db: Session = Depends(get_db)):
    return project_service.create_project(db, project)


@router.patch("/{project_id}", response_model=ProjectOut)
def update(project_id: int, project: ProjectUpdate, db: Session = Depends(get_db)):
    updated = project_service.update_project(db, project_id, project)
    if not updated:
        raise _not_found()
    return updated


@router.delete("/{project_id}", response_model=ProjectOut)
def delete(project_id: int, db: Session = Depends(get_db)):
    deleted = project_service.delete_project(db, project_id)
    if not deleted:
        raise _not_found()
    return deleted
