from taskhub.models.user import User
from taskhub.models.project import Project, ProjectMember, MemberRole
from taskhub.models.tasks import Task, TaskStatus, TaskPriority, Tag, TaskTag, Comment

__all__ = [
    "User",
    "Project",
    "ProjectMember",
    "MemberRole",
    "Task",
    "TaskStatus",
    "TaskPriority",
    "Tag",
    "TaskTag",
    "Comment",
]
