# minijira/seed.py
"""Default users and projects for an empty database."""
import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from minijira.auth.security import hash_password
from minijira.project.models import Project
from minijira.user.models import User

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "Password@123"

DEFAULT_USERS = [
    {"name": "Admin User", "email": "admin@minijira.local", "role": "admin"},
    {"name": "Jane Dev", "email": "jane@minijira.local", "role": "user"},
    {"name": "John QA", "email": "john@minijira.local", "role": "user"},
]

DEFAULT_PROJECTS = [
    {"name": "Mini Jira", "key": "MJ"},
    {"name": "Website Revamp", "key": "WEB"},
]


def seed_defaults_if_empty(db: Session) -> None:
    if not db.scalar(select(func.count(User.id))):
        hashed = hash_password(DEFAULT_PASSWORD)
        db.add_all(User(password=hashed, **user) for user in DEFAULT_USERS)
        logger.info("Seeded %d default users", len(DEFAULT_USERS))

    if not db.scalar(select(func.count(Project.id))):
        db.add_all(Project(**project) for project in DEFAULT_PROJECTS)
        logger.info("Seeded %d default projects", len(DEFAULT_PROJECTS))

    db.commit()
