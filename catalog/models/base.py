"""Shared column helpers for catalog models."""

from datetime import date
from uuid import uuid4


def new_id() -> str:
    """Generate a store identifier (32 lowercase hex characters)."""
    return uuid4().hex


def format_date(value: date | None) -> str:
    """Format a date as YYYY-MM-DD, or an empty string when unset."""
    return value.isoformat() if value is not None else ""
