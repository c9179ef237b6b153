from models.user import Role, User
from models.project import Project
from models.task import Task, TaskStatus
from models.comment import Comment

__all__ = ["Role", "User", "Project", "Task", "TaskStatus", "Comment"]
