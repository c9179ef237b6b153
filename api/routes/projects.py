from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app import projects, tasks
from auth.jwt_handler import TokenClaims
from auth.oauth2 import get_current_user
from db.session import get_db
from schemas.project import ProjectCreate, ProjectListResponse, ProjectResponse
from schemas.task import TaskCreate, TaskResponse

router = APIRouter(prefix="/api/projects", tags=["Projects"])


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    body: ProjectCreate,
    actor: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return projects.create_project(db, actor, body.title, body.description)


@router.get("", response_model=ProjectListResponse)
def list_projects(
    actor: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return {"projects": projects.list_projects(db, actor)}


@router.post("/{project_id}/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    project_id: str,
    body: TaskCreate,
    actor: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return tasks.create_task(db, actor, project_id, body.title, body.description)
