"""Reusable field checks for request schemas."""

import re
from typing import Any, Iterable, List, Type, TypeVar

from pydantic import ValidationError

E = TypeVar("E")

_TRIMMED = re.compile(r"^\S.*\S$")


def check_name(value: str, field: str) -> str:
    if not value:
        raise ValueError(f"{field} is required.")
    if len(value) < 2:
        raise ValueError(f"{field} must be at least 2 characters long.")
    if not _TRIMMED.match(value):
        raise ValueError(f"{field} must not have leading or trailing spaces.")
    return value


def check_new_username(value: str) -> str:
    if len(value) < 6:
        raise ValueError("Username must be at least 6 characters long.")
    if not re.search(r"\d", value):
        raise ValueError("Username must contain at least one number.")
    return value


def check_new_password(value: str) -> str:
    rules = (
        (r"[A-Z]", "Password must contain at least one uppercase letter."),
        (r"[a-z]", "Password must contain at least one lowercase letter."),
        (r"\d", "Password must contain at least one number."),
        (r"[\W_]", "Password must contain at least one symbol."),
    )
    for pattern, message in rules:
        if not re.search(pattern, value):
            raise ValueError(message)
    if len(value) < 8:
        raise ValueError("Password must be at least 8 characters long.")
    return value


def check_credential(value: str, field: str, min_length: int) -> str:
    if not value:
        raise ValueError(f"{field} is required.")
    if len(value) < min_length:
        raise ValueError(f"{field} must be at least {min_length} characters long.")
    if not _TRIMMED.match(value):
        raise ValueError(f"{field} must not have leading or trailing spaces.")
    return value


def enum_member(enum_cls: Type[E], value: Any, message: str) -> E:
    """Coerce ``value`` into ``enum_cls`` or fail with ``message``."""
    if isinstance(value, bool):
        raise ValueError(message)
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        raise ValueError(message) from None


def error_messages(errors: Iterable[dict]) -> List[str]:
    """Flatten pydantic error dicts into human readable messages."""
    messages = []
    for error in errors:
        cause = (error.get("ctx") or {}).get("error")
        if cause is not None and error.get("type") == "value_error":
            messages.append(str(cause))
            continue
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return messages


def validation_error_messages(exc: ValidationError) -> List[str]:
    return error_messages(exc.errors())
