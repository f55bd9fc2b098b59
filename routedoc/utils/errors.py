"""Error codes, exceptions and helpers for the documentation server."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Mapping, MutableMapping, Optional, Sequence


class ErrorCode(str, Enum):
    """Stable error codes returned in error envelopes."""

    INVALID_REQUEST = "INVALID_REQUEST"
    UNSUPPORTED_SCHEMA = "UNSUPPORTED_SCHEMA"
    UNSUPPORTED_PARAMETER_SCHEMA = "UNSUPPORTED_PARAMETER_SCHEMA"
    OVERRIDES_UNREADABLE = "OVERRIDES_UNREADABLE"
    OVERRIDES_MALFORMED = "OVERRIDES_MALFORMED"
    INTERNAL = "INTERNAL"


@dataclass(frozen=True)
class ErrorTemplate:
    """Default status, message, and recovery hints for an error code."""

    status: int
    message: str
    recovery: Sequence[str] = ()


_TEMPLATES: Mapping[ErrorCode, ErrorTemplate] = {
    ErrorCode.INVALID_REQUEST: ErrorTemplate(
        status=400,
        message="Request was malformed or failed validation.",
        recovery=(
            "Check required fields and value formats.",
        ),
    ),
    ErrorCode.UNSUPPORTED_SCHEMA: ErrorTemplate(
        status=500,
        message="A route declares a validation schema that cannot be documented.",
        recovery=(
            "Replace the schema with a supported kind or remove it from the guard.",
        ),
    ),
    ErrorCode.UNSUPPORTED_PARAMETER_SCHEMA: ErrorTemplate(
        status=500,
        message="Path and query guards must be flat object schemas.",
        recovery=(
            "Declare path and query parameters with an object schema.",
        ),
    ),
    ErrorCode.OVERRIDES_UNREADABLE: ErrorTemplate(
        status=500,
        message="Status code overrides could not be read.",
        recovery=(
            "Check ROUTEDOC_STATUS_CODES_PATH and file permissions.",
        ),
    ),
    ErrorCode.OVERRIDES_MALFORMED: ErrorTemplate(
        status=500,
        message="Status code overrides are malformed.",
        recovery=(
            "Map each route path to lowercase methods with integer status codes.",
        ),
    ),
    ErrorCode.INTERNAL: ErrorTemplate(
        status=500,
        message="Internal server error.",
        recovery=(
            "Retry the request or contact support with request logs.",
        ),
    ),
}


class DocumentationError(RuntimeError):
    """Base class for failures that abort a document build."""

    code: ErrorCode = ErrorCode.INTERNAL


class UnsupportedSchemaKind(DocumentationError):
    """Raised when a schema node has no documentation equivalent."""

    code = ErrorCode.UNSUPPORTED_SCHEMA

    def __init__(self, kind: str):
        super().__init__(f"Unsupported schema kind: {kind}")
        self.kind = kind


class UnsupportedParameterSchema(DocumentationError):
    """Raised when path or query parameters are not declared as an object."""

    code = ErrorCode.UNSUPPORTED_PARAMETER_SCHEMA

    def __init__(self, location: str, kind: str):
        super().__init__(f"{location} parameters must be an object schema, got {kind}")
        self.location = location
        self.kind = kind


class OverrideSourceUnreadable(DocumentationError):
    """Raised when the status override source cannot be read."""

    code = ErrorCode.OVERRIDES_UNREADABLE


class OverrideSourceMalformed(DocumentationError):
    """Raised when the status override source cannot be parsed or validated."""

    code = ErrorCode.OVERRIDES_MALFORMED


def _resolve_template(code: ErrorCode) -> ErrorTemplate:
    try:
        return _TEMPLATES[code]
    except KeyError:  # pragma: no cover - every code has a template
        raise ValueError(f"No error template registered for {code!s}") from None


def make_error(
    code: ErrorCode,
    message: Optional[str] = None,
    *,
    recovery: Optional[Iterable[str]] = None,
    status: Optional[int] = None,
) -> Dict[str, object]:
    """Create a JSON-serialisable error dict."""

    template = _resolve_template(code)
    resolved_message = message if message is not None else template.message
    resolved_status = status if status is not None else template.status
    resolved_recovery: List[str] = list(recovery) if recovery is not None else list(
        template.recovery
    )
    payload: MutableMapping[str, object] = {
        "status": int(resolved_status),
        "code": code.value,
        "message": resolved_message,
        "recovery": resolved_recovery,
    }
    return dict(payload)


__all__ = [
    "DocumentationError",
    "ErrorCode",
    "ErrorTemplate",
    "OverrideSourceMalformed",
    "OverrideSourceUnreadable",
    "UnsupportedParameterSchema",
    "UnsupportedSchemaKind",
    "make_error",
]
