from typing import List

from pydantic import BaseModel


class TeamMember(BaseModel):
    id: int
    name: str
    email: str


class TeamMemberListResponse(BaseModel):
    users: List[TeamMember]
