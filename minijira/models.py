# minijira/models.py
"""Imports every mapped model so relationships resolve, and creates the tables."""
from sqlalchemy.engine import Engine

from minijira.core.database import Base
from minijira.project.models import Project
from minijira.ticket.models import Ticket
from minijira.user.models import User


def init_db(bind: Engine) -> None:
    Base.metadata.create_all(bind=bind)


__all__ = ["Project", "Ticket", "User", "init_db"]
