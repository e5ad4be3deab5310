# minijira/user/models.py
from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from minijira.core.clock import utcnow
from minijira.core.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    role = Column(String, nullable=False, default="user")
    created_at = Column(DateTime, nullable=False, default=utcnow)

    tickets = relationship("Ticket", back_populates="assignee")
