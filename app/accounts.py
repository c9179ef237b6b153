"""
Credential store: account registration and login.
"""
from typing import Any, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.errors import AuthError, ConflictError
from app.logger import get_logger, logged_operation
from app.validation import (
    ValidationOutcome,
    validate_email,
    validate_name,
    validate_password,
    validate_role,
)
from auth.jwt_handler import TokenService
from auth.security import dummy_verify, hash_password, verify_password
from models.user import User

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@logged_operation("register")
def register(
    db: Session,
    tokens: TokenService,
    email: Any,
    name: Any,
    password: Any,
    role: Any,
) -> Tuple[User, str]:
    """
    Create an account and issue its first token.

    Raises:
        ValidationError: one or more fields are invalid (all are reported)
        ConflictError: the normalized email is already registered
    """
    values = (
        ValidationOutcome()
        .check("email", validate_email(email))
        .check("name", validate_name(name))
        .check("password", validate_password(password))
        .check("role", validate_role(role))
        .raise_if_invalid()
    )

    if db.query(User.id).filter(User.email == values["email"]).first():
        raise ConflictError("Email already exists")

    user = User(
        email=values["email"],
        name=values["name"],
        role=values["role"],
        password_hash=hash_password(values["password"]),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email already exists")
    db.refresh(user)

    logger.info(f"Registered user {user.id} ({user.role.value})")
    return user, tokens.issue(user.id, user.email, user.role)


@logged_operation("login")
def login(db: Session, tokens: TokenService, email: Any, password: Any) -> Tuple[User, str]:
    """
    Verify credentials and issue a token.

    Unknown email and wrong password raise the same AuthError.
    """
    values = (
        ValidationOutcome()
        .check("email", validate_email(email))
        .check("password", validate_password(password))
        .raise_if_invalid()
    )

    user = db.query(User).filter(User.email == values["email"]).first()
    if user is None:
        dummy_verify()
        raise AuthError(INVALID_CREDENTIALS)
    if not verify_password(values["password"], user.password_hash):
        raise AuthError(INVALID_CREDENTIALS)

    logger.info(f"User {user.id} logged in")
    return user, tokens.issue(user.id, user.email, user.role)


def get_user(db: Session, user_id: int) -> User:
    """Load the account behind a verified token."""
    user = db.get(User, user_id)
    if user is None:
        # Token outlived its account; treat as unauthenticated.
        logger.warning(f"Rejected request: token for unknown user {user_id}")
        raise AuthError("Authentication required")
    return user
