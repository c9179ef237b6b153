from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app import accounts
from auth.jwt_handler import TokenClaims, TokenService, get_token_service
from auth.oauth2 import get_current_user
from db.session import get_db
from schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserPublic

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    user, token = accounts.register(
        db, tokens,
        email=body.email,
        name=body.name,
        password=body.password,
        role=body.role,
    )
    return {"message": "User created successfully", "user": user, "token": token}


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    user, token = accounts.login(db, tokens, email=body.email, password=body.password)
    return {"message": "Login successful", "user": user, "token": token}


@router.get("/me", response_model=UserPublic)
def me(actor: TokenClaims = Depends(get_current_user), db: Session = Depends(get_db)):
    """Return the account behind the presented token."""
    return accounts.get_user(db, actor.id)
