from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app import tasks
from auth.jwt_handler import TokenClaims
from auth.oauth2 import get_current_user
from db.session import get_db
from schemas.task import (
    AssignTaskRequest,
    AssignTaskResponse,
    CommentCreate,
    CommentListResponse,
    CommentResponse,
    MyTaskListResponse,
    StatusUpdateRequest,
    StatusUpdateResponse,
)

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


@router.get("/me", response_model=MyTaskListResponse)
def list_my_tasks(
    actor: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return {"tasks": tasks.list_my_tasks(db, actor)}


@router.put("/{task_id}/assign", response_model=AssignTaskResponse)
def assign_task(
    task_id: str,
    body: AssignTaskRequest,
    actor: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    task = tasks.assign_task(db, actor, task_id, body.assignee_id)
    return {
        "message": "Task assigned successfully",
        "task": {
            "id": task.id,
            "title": task.title,
            "status": task.status,
            "assignee_id": task.assignee_id,
            "assignee_name": task.assignee.name,
            "assignee_email": task.assignee.email,
            "project_id": task.project_id,
        },
        "notification": "The team member will see this task in their dashboard",
    }


@router.put("/{task_id}/status", response_model=StatusUpdateResponse)
def update_status(
    task_id: str,
    body: StatusUpdateRequest,
    actor: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    task = tasks.update_status(db, actor, task_id, body.status)
    return {"message": "Status updated", "task": task}


@router.post("/{task_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def add_comment(
    task_id: str,
    body: CommentCreate,
    actor: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return tasks.add_comment(db, actor, task_id, body.content).to_dict()


@router.get("/{task_id}/comments", response_model=CommentListResponse)
def list_comments(
    task_id: str,
    actor: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return {"comments": [c.to_dict() for c in tasks.list_comments(db, actor, task_id)]}
