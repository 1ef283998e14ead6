import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum, select, func
from sqlalchemy.orm import relationship, column_property

from taskhub.database import Base
from taskhub.models.base import generate_id, utc_now
from taskhub.models.project import Project


class TaskStatus(str, enum.Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    ON_HOLD = "ON_HOLD"


class TaskPriority(str, enum.Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=generate_id)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    status = Column(Enum(TaskStatus, name="task_status"), nullable=False, default=TaskStatus.TODO)
    priority = Column(Enum(TaskPriority, name="task_priority"), nullable=True)
    due_date = Column(DateTime(timezone=True), nullable=True)
    project_id = Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    creator_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    assignee_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    project = relationship("Project", back_populates="tasks")
    creator = relationship("User", back_populates="created_tasks", foreign_keys=[creator_id])
    assignee = relationship("User", back_populates="assigned_tasks", foreign_keys=[assignee_id])
    tag_links = relationship("TaskTag", back_populates="task", order_by="TaskTag.position", passive_deletes=True)
    tags = relationship("Tag", secondary="task_tags", order_by="TaskTag.position", viewonly=True)
    comments = relationship(
        "Comment", back_populates="task", order_by="Comment.created_at.desc()", passive_deletes=True
    )


class Tag(Base):
    __tablename__ = "tags"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(Text, nullable=False)
    color = Column(String(7), nullable=False, default="#6B7280")

    task_links = relationship("TaskTag", back_populates="tag", passive_deletes=True)


class TaskTag(Base):
    __tablename__ = "task_tags"

    task_id = Column(String(36), ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True)
    tag_id = Column(String(36), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True)
    position = Column(Integer, nullable=False, default=0)

    task = relationship("Task", back_populates="tag_links")
    tag = relationship("Tag", back_populates="task_links")


class Comment(Base):
    __tablename__ = "comments"

    id = Column(String(36), primary_key=True, default=generate_id)
    content = Column(Text, nullable=False)
    task_id = Column(String(36), ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    task = relationship("Task", back_populates="comments")
    author = relationship("User")


# Aggregates loaded alongside their parent row
Task.comment_count = column_property(
    select(func.count(Comment.id))
    .where(Comment.task_id == Task.id)
    .correlate_except(Comment)
    .scalar_subquery()
)

Project.task_count = column_property(
    select(func.count(Task.id))
    .where(Task.project_id == Project.id)
    .correlate_except(Task)
    .scalar_subquery()
)
