"""
Request validation helpers shared by the Pydantic request models.

Field checks raise PydanticCustomError with the user-facing message, so
FastAPI collects every failing field into one RequestValidationError. The
app renders that as 400 with format_validation_errors().

Usage:
    class CreateThingRequest(BaseModel):
        title: str = Field(None, validate_default=True)

        @field_validator("title", mode="before")
        @classmethod
        def title_required(cls, value):
            return require_non_empty(value, "Title is required")
"""
from typing import Annotated, Any, Dict, Iterable, List, Sequence
import re

from pydantic import BeforeValidator
from pydantic_core import PydanticCustomError

INT_PATTERN = re.compile(r"^[+-]?\d+$")

# Local part: dot-separated atoms, no empty segments (no leading, trailing
# or doubled dots). Domain: dot-separated labels ending in an alphabetic TLD.
_ATOM = r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+"
_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
EMAIL_PATTERN = re.compile(
    rf"^{_ATOM}(?:\.{_ATOM})*@(?:{_LABEL}\.)+[A-Za-z]{{2,}}$"
)


# ============================================
# Checks used by field validators
# ============================================

def is_email(value: Any) -> bool:
    return isinstance(value, str) and len(value) <= 254 and bool(EMAIL_PATTERN.match(value))


def require_non_empty(value: Any, message: str) -> str:
    """Accept only a string with at least one character"""
    if not isinstance(value, str) or len(value) == 0:
        raise PydanticCustomError("not_empty", message)
    return value


def require_min_length(value: Any, minimum: int, message: str) -> str:
    if not isinstance(value, str) or len(value) < minimum:
        raise PydanticCustomError("min_length", message)
    return value


def require_email(value: Any, message: str) -> str:
    if not is_email(value):
        raise PydanticCustomError("email", message)
    return value


def require_choice(value: Any, choices: Iterable[str], message: str) -> str:
    if not isinstance(value, str) or value not in set(choices):
        raise PydanticCustomError("choice", message)
    return value


def _parse_int_id(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and INT_PATTERN.match(value):
        return int(value)
    raise PydanticCustomError("int_parsing", "ID must be an integer")


# Path parameter type: an integer ID with the API's own error message
RecordId = Annotated[int, BeforeValidator(_parse_int_id)]


# ============================================
# Error rendering
# ============================================

def _body_error(error: Dict[str, Any]) -> Dict[str, str]:
    if error["type"] == "json_invalid":
        message = "Request body must be valid JSON"
    elif error["type"] == "missing":
        message = "Request body is required"
    else:
        message = "Request body must be a JSON object"
    return {"field": "body", "message": message, "location": "body"}


def format_validation_errors(errors: Sequence[Dict[str, Any]]) -> List[Dict[str, str]]:
    """
    Flatten FastAPI/Pydantic errors into the API's error list.

    Args:
        errors: RequestValidationError.errors()

    Returns:
        [{"field": ..., "message": ..., "location": ...}, ...] in input order.
        Errors about the body as a whole (bad JSON, not an object, wrong
        content type) are reported on the field "body".
    """
    formatted = []
    for error in errors:
        loc = tuple(error.get("loc", ()))
        location = str(loc[0]) if loc else "body"

        if location == "body" and (len(loc) <= 1 or error["type"] == "json_invalid"):
            formatted.append(_body_error(error))
            continue

        formatted.append({
            "field": ".".join(str(part) for part in loc[1:]),
            "message": error["msg"],
            "location": location,
        })
    return formatted
