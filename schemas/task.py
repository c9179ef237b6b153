from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict

from models.task import TaskStatus


class TaskCreate(BaseModel):
    title: Any = None
    description: Any = None


class AssignTaskRequest(BaseModel):
    assignee_id: Any = None


class StatusUpdateRequest(BaseModel):
    status: Any = None


class CommentCreate(BaseModel):
    content: Any = None


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    project_id: int
    assignee_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class AssignedTask(BaseModel):
    id: int
    title: str
    status: TaskStatus
    assignee_id: int
    assignee_name: str
    assignee_email: str
    project_id: int


class AssignTaskResponse(BaseModel):
    message: str
    task: AssignedTask
    notification: str


class MyTask(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    project_id: int
    project_title: str
    updated_at: datetime


class MyTaskListResponse(BaseModel):
    tasks: List[MyTask]


class StatusUpdateTask(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    status: TaskStatus
    updated_at: datetime


class StatusUpdateResponse(BaseModel):
    message: str
    task: StatusUpdateTask


class CommentResponse(BaseModel):
    id: int
    content: str
    task_id: int
    author_id: int
    author_name: str
    created_at: datetime


class CommentListResponse(BaseModel):
    comments: List[CommentResponse]
