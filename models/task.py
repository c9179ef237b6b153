import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from db.base import Base
from models.user import utcnow


class TaskStatus(str, enum.Enum):
    """Task lifecycle states, totally ordered todo < in_progress < done."""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]

    def can_transition_to(self, target: "TaskStatus") -> bool:
        # Same-rank moves are accepted; only regressions are refused.
        return target.rank >= self.rank


_STATUS_RANK = {
    TaskStatus.TODO: 1,
    TaskStatus.IN_PROGRESS: 2,
    TaskStatus.DONE: 3,
}


class Task(Base):
    """Unit of work inside a project, optionally assigned to one team member."""
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(
        Enum(TaskStatus, values_callable=lambda e: [s.value for s in e], native_enum=False, length=20),
        nullable=False,
        default=TaskStatus.TODO,
    )
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False)
    assignee_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    project = relationship("Project", back_populates="tasks")
    assignee = relationship("User", back_populates="assigned_tasks", foreign_keys=[assignee_id])
    comments = relationship(
        "Comment", back_populates="task", cascade="all, delete-orphan", order_by="Comment.id"
    )

    __table_args__ = (
        Index("ix_tasks_project", "project_id"),
        Index("ix_tasks_assignee", "assignee_id"),
    )

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, status={self.status}, assignee_id={self.assignee_id})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "project_id": self.project_id,
            "assignee_id": self.assignee_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
