"""
Input validation helpers.

Each validator returns a FieldResult; a ValidationOutcome aggregates the
results of one request so every failing field is reported together.
"""
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.errors import ValidationError
from models.task import TaskStatus
from models.user import Role

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

NAME_MAX_LENGTH = 100
TITLE_MAX_LENGTH = 255
PASSWORD_MIN_LENGTH = 6
# Upper bound of the INTEGER primary key columns
MAX_ID = 2**31 - 1


@dataclass(frozen=True)
class FieldResult:
    ok: bool
    value: Any = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: Any) -> "FieldResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "FieldResult":
        return cls(ok=False, error=error)


class ValidationOutcome:
    """Collects per-field results for a single request."""

    def __init__(self) -> None:
        self._results: Dict[str, FieldResult] = {}

    def check(self, field: str, result: FieldResult) -> "ValidationOutcome":
        self._results[field] = result
        return self

    @property
    def is_valid(self) -> bool:
        return all(r.ok for r in self._results.values())

    @property
    def errors(self) -> Dict[str, str]:
        return {f: r.error for f, r in self._results.items() if not r.ok}

    @property
    def values(self) -> Dict[str, Any]:
        return {f: r.value for f, r in self._results.items() if r.ok}

    def raise_if_invalid(self) -> Dict[str, Any]:
        """Raise ValidationError listing every failed field, else return the cleaned values."""
        if not self.is_valid:
            raise ValidationError(self.errors)
        return self.values


def _is_blank(raw: Any) -> bool:
    return raw is None or raw == "" or raw is False


def validate_email(raw: Any) -> FieldResult:
    """Trim and lowercase, then check the local@domain.tld shape."""
    if _is_blank(raw):
        return FieldResult.failure("Email is required")
    if not isinstance(raw, str):
        return FieldResult.failure("Invalid email format")
    email = raw.strip().lower()
    if not EMAIL_PATTERN.match(email):
        return FieldResult.failure("Invalid email format")
    return FieldResult.success(email)


def validate_password(raw: Any) -> FieldResult:
    if _is_blank(raw):
        return FieldResult.failure("Password is required")
    if not isinstance(raw, str):
        return FieldResult.failure("Password must be text")
    password = raw
    if len(password) < PASSWORD_MIN_LENGTH:
        return FieldResult.failure(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
        )
    return FieldResult.success(password)


def validate_name(raw: Any) -> FieldResult:
    if _is_blank(raw):
        return FieldResult.failure("Name is required")
    if not isinstance(raw, str):
        return FieldResult.failure("Name must be text")
    name = raw.strip()
    if not name:
        return FieldResult.failure("Name cannot be empty")
    if len(name) > NAME_MAX_LENGTH:
        return FieldResult.failure(f"Name cannot exceed {NAME_MAX_LENGTH} characters")
    return FieldResult.success(name)


def validate_role(raw: Any) -> FieldResult:
    if _is_blank(raw):
        return FieldResult.failure("Role is required")
    try:
        return FieldResult.success(Role(str(raw)))
    except ValueError:
        return FieldResult.failure(
            'Role must be either "project_manager" or "team_member"'
        )


def validate_title(raw: Any, kind: str = "Project") -> FieldResult:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return FieldResult.failure(f"{kind} title is required")
    if not isinstance(raw, str):
        return FieldResult.failure("Title must be text")
    title = raw.strip()
    if len(title) > TITLE_MAX_LENGTH:
        return FieldResult.failure(f"Title cannot exceed {TITLE_MAX_LENGTH} characters")
    return FieldResult.success(title)


def validate_description(raw: Any) -> FieldResult:
    """Optional free text; blank collapses to None."""
    if raw is None:
        return FieldResult.success(None)
    if not isinstance(raw, str):
        return FieldResult.failure("Description must be text")
    return FieldResult.success(raw.strip() or None)


def validate_comment_content(raw: Any) -> FieldResult:
    if raw is None:
        return FieldResult.failure("Comment content is required")
    content = str(raw).strip()
    if not content:
        return FieldResult.failure("Comment content cannot be empty or whitespace only")
    return FieldResult.success(content)


def validate_status(raw: Any) -> FieldResult:
    if _is_blank(raw):
        return FieldResult.failure("Status is required")
    try:
        return FieldResult.success(TaskStatus(str(raw)))
    except ValueError:
        allowed = ", ".join(s.value for s in TaskStatus)
        return FieldResult.failure(f"Status must be one of: {allowed}")


def validate_assignee_id(raw: Any) -> FieldResult:
    """JSON integers only; booleans and numeric strings are rejected."""
    if raw is None or raw == 0 or raw is False:
        return FieldResult.failure("Assignee ID is required")
    if isinstance(raw, bool) or not isinstance(raw, int) or not 0 < raw <= MAX_ID:
        return FieldResult.failure("Assignee ID must be a positive integer")
    return FieldResult.success(raw)


def parse_positive_int(raw: Any) -> FieldResult:
    """Parse a path segment such as `42` into a positive integer."""
    text = str(raw).strip() if raw is not None else ""
    # Length check first: int() refuses very long digit strings.
    if not (text.isascii() and text.isdigit()) or len(text) > len(str(MAX_ID)):
        return FieldResult.failure(f"Invalid ID: {raw}")
    if not 0 < int(text) <= MAX_ID:
        return FieldResult.failure(f"Invalid ID: {raw}")
    return FieldResult.success(int(text))
