from typing import Any

from pydantic import BaseModel, ConfigDict

from models.user import Role


class RegisterRequest(BaseModel):
    # Loosely typed on purpose: field checks happen in app.validation so
    # every failing field is reported at once with its own message.
    email: Any = None
    name: Any = None
    password: Any = None
    role: Any = None


class LoginRequest(BaseModel):
    email: Any = None
    password: Any = None


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    role: Role


class AuthResponse(BaseModel):
    message: str
    user: UserPublic
    token: str
