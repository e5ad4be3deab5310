# minijira/ticket/models.py
import enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from minijira.core.clock import utcnow
from minijira.core.database import Base


class Priority(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class TicketStatus(str, enum.Enum):
    OPEN = "Open"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


PRIORITIES = [p.value for p in Priority]
STATUSES = [s.value for s in TicketStatus]


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, index=True, nullable=False)
    description = Column(String, nullable=False)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    assignee_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    priority = Column(String, nullable=False, default=Priority.MEDIUM.value, index=True)
    status = Column(String, nullable=False, default=TicketStatus.OPEN.value, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    project = relationship("Project", back_populates="tickets")
    assignee = relationship("User", back_populates="tickets")
