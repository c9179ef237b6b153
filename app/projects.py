"""
Project management: creation and per-owner listing with task summaries.
"""
from typing import Any, Dict, List

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.errors import ConflictError
from app.logger import get_logger, logged_operation
from app.validation import ValidationOutcome, validate_description, validate_title
from auth.jwt_handler import TokenClaims
from auth.oauth2 import require_role
from models.project import Project
from models.task import Task, TaskStatus
from models.user import Role

logger = get_logger(__name__)

DUPLICATE_TITLE = "You already have a project with this title"


@logged_operation("create_project")
def create_project(db: Session, actor: TokenClaims, title: Any, description: Any) -> Project:
    require_role(actor, Role.PROJECT_MANAGER, "Only Project Managers can create projects")

    values = (
        ValidationOutcome()
        .check("title", validate_title(title, kind="Project"))
        .check("description", validate_description(description))
        .raise_if_invalid()
    )

    existing = (
        db.query(Project.id)
        .filter(Project.owner_id == actor.id, Project.title == values["title"])
        .first()
    )
    if existing:
        raise ConflictError(DUPLICATE_TITLE)

    project = Project(
        title=values["title"],
        description=values["description"],
        owner_id=actor.id,
    )
    db.add(project)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_TITLE)
    db.refresh(project)

    logger.info(f"User {actor.id} created project {project.id} '{project.title}'")
    return project


def _empty_summary() -> Dict[str, int]:
    return {status.value: 0 for status in TaskStatus}


@logged_operation("list_projects")
def list_projects(db: Session, actor: TokenClaims) -> List[Dict[str, Any]]:
    """Owner's projects, newest first, each with a per-status task count."""
    require_role(actor, Role.PROJECT_MANAGER, "Only Project Managers can view projects")

    projects = (
        db.query(Project)
        .filter(Project.owner_id == actor.id)
        .order_by(Project.created_at.desc(), Project.id.desc())
        .all()
    )
    if not projects:
        return []

    counts = (
        db.query(Task.project_id, Task.status, func.count(Task.id))
        .filter(Task.project_id.in_([p.id for p in projects]))
        .group_by(Task.project_id, Task.status)
        .all()
    )
    summaries: Dict[int, Dict[str, int]] = {p.id: _empty_summary() for p in projects}
    for project_id, status, count in counts:
        summaries[project_id][status.value] = count

    results = []
    for project in projects:
        data = project.to_dict()
        data["task_summary"] = summaries[project.id]
        results.append(data)
    return results
