"""
Directory lookup: users eligible to be task assignees.
"""
from typing import Dict, List

from sqlalchemy.orm import Session

from app.logger import logged_operation
from auth.jwt_handler import TokenClaims
from auth.oauth2 import require_role
from models.user import Role, User


@logged_operation("list_team_members")
def list_team_members(db: Session, actor: TokenClaims) -> List[Dict]:
    require_role(actor, Role.PROJECT_MANAGER, "Only Project Managers can view team members")

    members = (
        db.query(User.id, User.name, User.email)
        .filter(User.role == Role.TEAM_MEMBER)
        .order_by(User.name.asc(), User.id.asc())
        .all()
    )
    return [{"id": m.id, "name": m.name, "email": m.email} for m in members]
