"""
Task lifecycle: creation, assignment, status progression and comments.

Checks run in a fixed order for every operation: role, input shape,
existence, ownership, business rule, then the write.
"""
from typing import Any, Dict, List

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.errors import AuthorizationError, BadRequestError, ConflictError, NotFoundError
from app.logger import get_logger, logged_operation
from app.validation import (
    ValidationOutcome,
    parse_positive_int,
    validate_assignee_id,
    validate_comment_content,
    validate_description,
    validate_status,
    validate_title,
)
from auth.jwt_handler import TokenClaims
from auth.oauth2 import require_role
from models.comment import Comment
from models.project import Project
from models.task import Task, TaskStatus
from models.user import Role, User, utcnow

logger = get_logger(__name__)


def _parse_id(raw: Any, label: str) -> int:
    result = parse_positive_int(raw)
    if not result.ok:
        raise BadRequestError(f"Invalid {label} ID: {raw}")
    return result.value


def _get_task(db: Session, task_id: int) -> Task:
    task = db.get(Task, task_id)
    if task is None:
        raise NotFoundError("Task not found", details=f"No task exists with ID {task_id}")
    return task


@logged_operation("create_task")
def create_task(
    db: Session,
    actor: TokenClaims,
    project_id: Any,
    title: Any,
    description: Any,
) -> Task:
    require_role(actor, Role.PROJECT_MANAGER, "Only Project Managers can create tasks")
    pid = _parse_id(project_id, "project")

    values = (
        ValidationOutcome()
        .check("title", validate_title(title, kind="Task"))
        .check("description", validate_description(description))
        .raise_if_invalid()
    )

    project = db.get(Project, pid)
    if project is None:
        raise NotFoundError("Project not found", details=f"No project exists with ID {pid}")
    if project.owner_id != actor.id:
        raise AuthorizationError("You can only add tasks to your own projects")

    task = Task(
        title=values["title"],
        description=values["description"],
        status=TaskStatus.TODO,
        project_id=project.id,
        assignee_id=None,
    )
    db.add(task)
    db.commit()
    db.refresh(task)

    logger.info(f"User {actor.id} created task {task.id} in project {project.id}")
    return task


@logged_operation("assign_task")
def assign_task(db: Session, actor: TokenClaims, task_id: Any, assignee_id: Any) -> Task:
    """
    Point a task at a team member, overwriting any previous assignee.
    Re-assigning the current assignee is an error, not a no-op.
    """
    require_role(actor, Role.PROJECT_MANAGER, "Only Project Managers can assign tasks")
    tid = _parse_id(task_id, "task")

    values = ValidationOutcome().check("assignee_id", validate_assignee_id(assignee_id)).raise_if_invalid()
    new_assignee_id = values["assignee_id"]
    if new_assignee_id == actor.id:
        raise BadRequestError(
            "You cannot assign tasks to yourself",
            details="Project Managers cannot be task assignees",
        )

    task = _get_task(db, tid)
    project = task.project
    if project.owner_id != actor.id:
        raise AuthorizationError(
            "You can only assign tasks in your own projects",
            details=f'You do not own project "{project.title}"',
        )

    if task.assignee_id == new_assignee_id:
        raise _already_assigned(new_assignee_id)

    assignee = db.get(User, new_assignee_id)
    if assignee is None:
        raise NotFoundError("Team member not found", details=f"No user exists with ID {new_assignee_id}")
    if assignee.role is not Role.TEAM_MEMBER:
        raise BadRequestError(
            "Cannot assign to this user",
            details=f"{assignee.name} ({assignee.email}) is a {assignee.role.value}, not a team member",
        )

    # Conditional write: loses cleanly to a concurrent identical assignment.
    updated = (
        db.query(Task)
        .filter(
            Task.id == tid,
            or_(Task.assignee_id.is_(None), Task.assignee_id != new_assignee_id),
        )
        .update({"assignee_id": new_assignee_id, "updated_at": utcnow()}, synchronize_session=False)
    )
    if not updated:
        db.rollback()
        raise _already_assigned(new_assignee_id)
    db.commit()
    db.refresh(task)

    logger.info(f"User {actor.id} assigned task {task.id} to user {assignee.id}")
    return task


def _already_assigned(assignee_id: int) -> BadRequestError:
    return BadRequestError(
        "Task is already assigned to this team member",
        assignee_id=assignee_id,
        current_status="Already assigned",
    )


@logged_operation("list_my_tasks")
def list_my_tasks(db: Session, actor: TokenClaims) -> List[Dict[str, Any]]:
    """Tasks assigned to the caller, most recently updated first."""
    require_role(actor, Role.TEAM_MEMBER, "Only Team Members can view assigned tasks")

    rows = (
        db.query(Task, Project.title)
        .join(Project, Task.project_id == Project.id)
        .filter(Task.assignee_id == actor.id)
        .order_by(Task.updated_at.desc(), Task.id.desc())
        .all()
    )
    tasks = []
    for task, project_title in rows:
        data = task.to_dict()
        data["project_title"] = project_title
        tasks.append(data)
    return tasks


@logged_operation("update_status")
def update_status(db: Session, actor: TokenClaims, task_id: Any, status: Any) -> Task:
    """
    Move a task forward through todo -> in_progress -> done.

    Only the current assignee may do this. Moving to the current status is
    accepted and refreshes `updated_at`.
    """
    tid = _parse_id(task_id, "task")
    values = ValidationOutcome().check("status", validate_status(status)).raise_if_invalid()
    new_status: TaskStatus = values["status"]

    task = _get_task(db, tid)
    if task.assignee_id is None or task.assignee_id != actor.id:
        raise AuthorizationError(
            "You can only update status of your assigned tasks",
            details=f"You are not assigned to task '{task.title}' in project '{task.project.title}'",
        )

    current: TaskStatus = task.status
    if not current.can_transition_to(new_status):
        raise BadRequestError(
            "Invalid status transition",
            details=f'Cannot move task from "{current.value}" to "{new_status.value}"',
        )

    updated = (
        db.query(Task)
        .filter(Task.id == tid, Task.status == current, Task.assignee_id == actor.id)
        .update({"status": new_status, "updated_at": utcnow()}, synchronize_session=False)
    )
    if not updated:
        db.rollback()
        raise ConflictError("Task was modified concurrently", details="Reload the task and retry")
    db.commit()
    db.refresh(task)

    logger.info(f"User {actor.id} moved task {task.id} from {current.value} to {new_status.value}")
    return task


def _ensure_can_comment(task: Task, actor: TokenClaims) -> None:
    is_assignee = task.assignee_id is not None and task.assignee_id == actor.id
    is_owner = task.project.owner_id == actor.id
    if not (is_assignee or is_owner):
        raise AuthorizationError(
            "You cannot comment on this task",
            details="Only the assigned team member or project owner can comment",
        )


@logged_operation("add_comment")
def add_comment(db: Session, actor: TokenClaims, task_id: Any, content: Any) -> Comment:
    tid = _parse_id(task_id, "task")
    values = ValidationOutcome().check("content", validate_comment_content(content)).raise_if_invalid()

    task = _get_task(db, tid)
    _ensure_can_comment(task, actor)

    comment = Comment(content=values["content"], task_id=task.id, author_id=actor.id)
    db.add(comment)
    db.commit()
    db.refresh(comment)

    logger.info(f"User {actor.id} commented on task {task.id}")
    return comment


@logged_operation("list_comments")
def list_comments(db: Session, actor: TokenClaims, task_id: Any) -> List[Comment]:
    """Comments on a task, oldest first. Same audience as add_comment."""
    tid = _parse_id(task_id, "task")
    task = _get_task(db, tid)
    _ensure_can_comment(task, actor)

    return (
        db.query(Comment)
        .filter(Comment.task_id == task.id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
        .all()
    )
