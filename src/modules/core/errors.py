"""Helpers for turning validation failures into ``{"detail": ...}`` bodies."""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError

_VALUE_ERROR_PREFIX = "Value error, "


def validation_detail(exc: PydanticValidationError) -> str:
    """Flatten a Pydantic error into one human readable sentence per field."""
    messages = []
    for error in exc.errors():
        message = error["msg"]
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {message}" if location else message)
    return " ".join(messages)
