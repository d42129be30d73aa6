# 📄 File: contactbook/shared/utils/formatters.py

# 🧭 Purpose (Layman Explanation):
# Turns the checker's complaints about a request into one short sentence a client can read.

# 🧪 Purpose (Technical Summary):
# Formatting utilities for validation error lists (pydantic / FastAPI) into the single
# message string carried by the public error body.

# 🔗 Dependencies:
# - pydantic: ValidationError error dictionaries

# 🔄 Connected Modules / Calls From:
# Used by: request body parsing in the users and contacts routers,
# RequestValidationError handler in contactbook.main

from typing import Any, Dict, Iterable, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

VALUE_ERROR_PREFIX = "Value error, "


def format_error_location(loc: Iterable[Any]) -> str:
    """Name the offending field, skipping the 'body'/'query' segment."""
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "header")]
    return ".".join(parts)


def format_validation_error(error: Dict[str, Any]) -> str:
    """
    Format one pydantic error entry.

    Examples:
        {"type": "missing", "loc": ("password",)} -> '"password" is required'
        {"loc": ("email",), "msg": "Value error, \"email\" must be ..."} -> '"email" must be ...'
    """
    field = format_error_location(error.get("loc", ()))
    message = str(error.get("msg", "is invalid"))
    if message.startswith(VALUE_ERROR_PREFIX):
        message = message[len(VALUE_ERROR_PREFIX):]

    if error.get("type") == "missing":
        return f'"{field}" is required' if field else "Request body is required"
    if not field or message.startswith('"'):
        return message
    return f'"{field}" {message[:1].lower()}{message[1:]}'


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> str:
    """Join every error into one message."""
    messages = [format_validation_error(error) for error in errors]
    return "; ".join(messages) or "Validation failed"


def parse_model(
    model: Type[ModelT],
    data: Any,
    context: Optional[Dict[str, Any]] = None,
) -> Tuple[Optional[ModelT], Optional[str]]:
    """
    Validate ``data`` against ``model`` without raising.

    Returns:
        (instance, None) on success, (None, message) on failure
    """
    try:
        return model.model_validate(data if data is not None else {}, context=context), None
    except PydanticValidationError as e:
        return None, format_validation_errors(e.errors())
