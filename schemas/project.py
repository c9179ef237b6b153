from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict


class ProjectCreate(BaseModel):
    title: Any = None
    description: Any = None


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    owner_id: int
    created_at: datetime


class TaskSummary(BaseModel):
    todo: int = 0
    in_progress: int = 0
    done: int = 0


class ProjectWithSummary(ProjectResponse):
    task_summary: TaskSummary


class ProjectListResponse(BaseModel):
    projects: List[ProjectWithSummary]
