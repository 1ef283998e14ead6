from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from taskhub.database import Base
from taskhub.models.base import generate_id, utc_now

class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(100), nullable=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    image = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    memberships = relationship("ProjectMember", back_populates="user", passive_deletes=True)
    assigned_tasks = relationship("Task", back_populates="assignee", foreign_keys="[Task.assignee_id]")
    created_tasks = relationship("Task", back_populates="creator", foreign_keys="[Task.creator_id]")
