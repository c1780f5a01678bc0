"""Input validation helpers"""

from pydantic import BaseModel, ValidationError as PydanticValidationError
from typing import Any, Dict, Iterable, List, Mapping, Type, TypeVar
import re

from movieshelf.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

# Locations FastAPI prefixes onto request errors
_REQUEST_LOCATIONS = {"body", "query", "path", "header"}

DANGEROUS_PATTERNS = [
    r'<script[^>]*>',
    r'javascript:',
    r'<[^>]*\son\w+\s*=',  # event handler attributes inside a tag
    r'<iframe',
]


class SafeStringMixin:
    """Mixin for XSS-safe string validation"""

    @staticmethod
    def validate_no_script(value: str) -> str:
        """Block common XSS patterns"""
        if not value:
            return value

        for pattern in DANGEROUS_PATTERNS:
            if re.search(pattern, value, re.IGNORECASE):
                raise ValueError("Invalid characters detected")

        return value


def _field_name(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc]
    if parts and parts[0] in _REQUEST_LOCATIONS:
        parts = parts[1:]
    return ".".join(parts) or "body"


def _clean_message(message: str) -> str:
    # pydantic prefixes messages raised from validators
    return message.removeprefix("Value error, ")


def field_errors(errors: Iterable[Mapping[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic/FastAPI error dicts to [{"field", "message"}]"""
    return [
        {"field": _field_name(error.get("loc", ())), "message": _clean_message(error.get("msg", "Invalid value"))}
        for error in errors
    ]


def to_validation_error(errors: Iterable[Mapping[str, Any]]) -> ValidationError:
    flattened = field_errors(errors)
    if not flattened:
        return ValidationError("Invalid request")
    first = flattened[0]
    return ValidationError(f"{first['field']}: {first['message']}", flattened)


def validate_payload(model: Type[ModelT], data: Mapping[str, Any]) -> ModelT:
    """
    Validate raw input against a schema.

    Returns the typed model, or raises ValidationError naming every
    offending field.
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise to_validation_error(e.errors()) from None
