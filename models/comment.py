from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from db.base import Base
from models.user import utcnow


class Comment(Base):
    """Append-only note on a task by its assignee or the project owner."""
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    content = Column(Text, nullable=False)
    task_id = Column(Integer, ForeignKey("tasks.id"), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    task = relationship("Task", back_populates="comments")
    author = relationship("User")

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, task_id={self.task_id}, author_id={self.author_id})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "content": self.content,
            "task_id": self.task_id,
            "author_id": self.author_id,
            "author_name": self.author.name if self.author else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
