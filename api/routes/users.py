from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app import directory
from auth.jwt_handler import TokenClaims
from auth.oauth2 import get_current_user
from db.session import get_db
from schemas.user import TeamMemberListResponse

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=TeamMemberListResponse)
def list_team_members(
    actor: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Team members a project manager can assign tasks to."""
    return {"users": directory.list_team_members(db, actor)}
