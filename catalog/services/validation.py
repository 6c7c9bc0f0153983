"""
Form Validation Service

Validates and sanitizes HTML form submissions against the pydantic form
schemas in catalog.schemas.

Pipeline for validate_form(schema, raw):
1. Read every schema field from the raw form data
   - text fields are trimmed
   - list fields (e.g. "genre") are coerced to a list
2. Validate with the schema's rules (pydantic)
3. HTML-escape the free-text fields the schema names

Validation never raises. The FormResult always carries the best-effort
values, so a form can be redisplayed pre-filled next to its errors.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, ClassVar

from markupsafe import escape
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_core import PydanticCustomError

logger = logging.getLogger(__name__)

_ALPHANUMERIC = re.compile(r"^[A-Za-z0-9]+$")
# Reduced-precision ISO-8601 dates: "YYYY" and "YYYY-MM"
_REDUCED_DATE = re.compile(r"^(\d{4})(?:-(\d{2}))?$")


# =============================================================================
# Result Types
# =============================================================================
@dataclass(frozen=True)
class FieldError:
    """One validation message for one form field."""

    field: str
    msg: str
    value: Any = None


@dataclass
class FormResult:
    """Cleaned values plus the (possibly empty) ordered list of errors."""

    values: dict[str, Any]
    errors: list[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


# =============================================================================
# Form Schema Base
# =============================================================================
class FormSchema(BaseModel):
    """
    Base class for form schemas.

    Subclasses declare fields with pydantic and attach rules with
    field_validator(mode="before") using the rule helpers below.

    Class attributes:
        escape_fields: Fields HTML-escaped after validation
        list_fields: Fields coerced to a list (absent -> [], scalar -> [x])
    """

    escape_fields: ClassVar[tuple[str, ...]] = ()
    list_fields: ClassVar[tuple[str, ...]] = ()

    # Run rules on fields missing from the submission too
    model_config = ConfigDict(validate_default=True, extra="ignore")


# =============================================================================
# Rules
# =============================================================================
# Each rule either returns the (possibly converted) value or raises a
# PydanticCustomError whose message is shown to the user as-is.

def required(value: Any, message: str) -> Any:
    """Reject missing or empty values (minimum length 1)."""
    if value is None or (isinstance(value, str) and len(value) < 1):
        raise PydanticCustomError("required", message)
    return value


def max_length(value: str | None, limit: int, message: str) -> str | None:
    if value is not None and len(value) > limit:
        raise PydanticCustomError("max_length", message)
    return value


def alphanumeric(value: str | None, message: str) -> str | None:
    """Allow ASCII letters and digits only; empty values are left to required()."""
    if value and not _ALPHANUMERIC.match(value):
        raise PydanticCustomError("alphanumeric", message)
    return value


def optional_date(value: Any, message: str) -> date | None:
    """
    Parse an optional ISO-8601 date.

    Falsy values ("", None) mean "not provided" and become None instead of
    failing. Accepted forms:

        "1932"                 -> 1932-01-01
        "1932-11"              -> 1932-11-01
        "1932-11-08"           -> 1932-11-08
        "19321108"             -> 1932-11-08
        "1932-11-08T10:30:00Z" -> 1932-11-08
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise PydanticCustomError("date", message)

    reduced = _REDUCED_DATE.match(value)
    try:
        if reduced:
            year, month = reduced.groups()
            return date(int(year), int(month or 1), 1)
        return date.fromisoformat(value)
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        raise PydanticCustomError("date", message) from None


def one_of(value: Any, choices: Any, message: str) -> Any:
    if value not in choices:
        raise PydanticCustomError("one_of", message)
    return value


def empty_to_none(value: Any) -> Any:
    """Treat an empty submission as "not provided"."""
    return value if value else None


def as_list(value: Any) -> list[Any]:
    """
    Coerce a possibly-singular form value into a list.

        as_list(None)       -> []
        as_list("a")        -> ["a"]
        as_list(["a", "b"]) -> ["a", "b"]
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


# =============================================================================
# Entry Point
# =============================================================================
def validate_form(schema: type[FormSchema], raw: Mapping[str, Any]) -> FormResult:
    """
    Validate and sanitize a form submission.

    Args:
        schema: Form schema class declaring fields and rules
        raw: Submitted data (starlette FormData or a plain mapping)

    Returns:
        FormResult with cleaned values on success, or the sanitized input
        and field errors (in schema field order) on failure
    """
    values = read_form(schema, raw)

    try:
        form = schema.model_validate(values)
    except ValidationError as exc:
        errors = []
        for error in exc.errors():
            name = str(error["loc"][0]) if error["loc"] else ""
            errors.append(FieldError(field=name, msg=error["msg"], value=values.get(name)))

        logger.debug(f"{schema.__name__} rejected with {len(errors)} error(s)")
        return FormResult(values=_escape(schema, values), errors=errors)

    return FormResult(values=_escape(schema, form.model_dump()))


def read_form(schema: type[FormSchema], raw: Mapping[str, Any]) -> dict[str, Any]:
    """Pull the schema's fields out of raw form data, trimmed."""
    values: dict[str, Any] = {}

    for name in schema.model_fields:
        value = _get(raw, name)

        if name in schema.list_fields:
            values[name] = [_trim(item) for item in as_list(value)]
        else:
            values[name] = _trim(value)

    return values


def _get(raw: Mapping[str, Any], name: str) -> Any:
    # Repeated keys in form data (checkboxes) arrive through getlist()
    if hasattr(raw, "getlist"):
        submitted = raw.getlist(name)
        if len(submitted) > 1:
            return submitted
        return submitted[0] if submitted else None
    return raw.get(name)


def _trim(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _escape(schema: type[FormSchema], values: dict[str, Any]) -> dict[str, Any]:
    escaped = dict(values)

    for name in schema.escape_fields:
        value = escaped.get(name)
        if isinstance(value, str):
            escaped[name] = str(escape(value))
        elif isinstance(value, list):
            escaped[name] = [str(escape(item)) if isinstance(item, str) else item for item in value]

    return escaped
