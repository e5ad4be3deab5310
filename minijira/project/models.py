# minijira/project/models.py
from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from minijira.core.clock import utcnow
from minijira.core.database import Base

class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    key = Column(String, unique=True, index=True, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    tickets = relationship("Ticket", back_populates="project")
