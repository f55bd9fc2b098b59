"""Exception handlers that turn failures into error envelopes."""
import json
import logging
import uuid

from starlette.requests import Request
from starlette.responses import JSONResponse

from .api._shared import error_response
from .utils.errors import DocumentationError, ErrorCode
from .utils.logging import current_request

log = logging.getLogger(__name__)


def _correlation_id() -> str:
    context = current_request()
    return context.request_id if context is not None else uuid.uuid4().hex


def _invalid_request(request: Request, exc: Exception, summary: str) -> JSONResponse:
    correlation_id = _correlation_id()
    log.warning("%s: %s", summary, exc, extra={"correlation_id": correlation_id})
    # Exception text stays out of responses unless the app runs in debug mode.
    message = str(exc) if getattr(request.app, "debug", False) else None
    return error_response(
        ErrorCode.INVALID_REQUEST,
        message,
        meta={"correlation_id": correlation_id, "summary": summary},
    )


def _document_failed(exc: DocumentationError) -> JSONResponse:
    correlation_id = _correlation_id()
    log.error(
        "document.failed: %s", exc, extra={"correlation_id": correlation_id, "code": exc.code.value}
    )
    return error_response(exc.code, str(exc), meta={"correlation_id": correlation_id})


def install_error_handlers(app) -> None:
    async def _on_documentation_error(request: Request, exc: DocumentationError) -> JSONResponse:
        return _document_failed(exc)

    async def _on_json_decode_error(request: Request, exc: json.JSONDecodeError) -> JSONResponse:
        return _invalid_request(request, exc, "json_decode_error")

    async def _on_value_error(request: Request, exc: ValueError) -> JSONResponse:
        return _invalid_request(request, exc, "value_error")

    app.add_exception_handler(DocumentationError, _on_documentation_error)
    app.add_exception_handler(json.JSONDecodeError, _on_json_decode_error)
    app.add_exception_handler(ValueError, _on_value_error)


__all__ = ["install_error_handlers"]
