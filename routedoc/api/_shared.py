"""Response envelopes: ``{"ok", "data", "errors"}`` plus optional ``meta``."""
from __future__ import annotations

from typing import Dict, Mapping, Optional

from starlette.responses import JSONResponse

from ..utils.errors import ErrorCode, make_error


def envelope_ok(data: Dict[str, object]) -> Dict[str, object]:
    return {"ok": True, "data": data, "errors": []}


def envelope_error(
    code: ErrorCode,
    message: Optional[str] = None,
    *,
    meta: Optional[Mapping[str, object]] = None,
) -> Dict[str, object]:
    payload: Dict[str, object] = {"ok": False, "data": None, "errors": [make_error(code, message)]}
    if meta:
        payload["meta"] = dict(meta)
    return payload


def error_response(
    code: ErrorCode,
    message: Optional[str] = None,
    *,
    meta: Optional[Mapping[str, object]] = None,
) -> JSONResponse:
    """Render an error envelope with the HTTP status registered for *code*."""

    payload = envelope_error(code, message, meta=meta)
    return JSONResponse(payload, status_code=payload["errors"][0]["status"])


__all__ = ["envelope_error", "envelope_ok", "error_response"]
