"""Request-scoped logging for document builds.

A request scope assigns an id, collects named counters from anything that
runs inside it (the cache, the assembler) and logs start/finish records
carrying both. Code outside a scope can call :func:`increment_counter`
freely; the call is dropped.
"""
from __future__ import annotations

import contextvars
import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from time import monotonic
from typing import Dict, Iterator, Mapping, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_ACTIVE: contextvars.ContextVar[Optional["RequestContext"]] = contextvars.ContextVar(
    "routedoc_active_request", default=None
)


def configure_root(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


@dataclass(slots=True)
class RequestContext:
    request_id: str
    started: float = field(default_factory=monotonic)
    counters: Dict[str, int] = field(default_factory=dict)

    @property
    def elapsed(self) -> float:
        return monotonic() - self.started

    def increment(self, counter: str, amount: int = 1) -> int:
        self.counters[counter] = self.counters.get(counter, 0) + amount
        return self.counters[counter]


@contextmanager
def scoped_timer(
    logger: logging.Logger, message: str, *, extra: Optional[Mapping[str, object]] = None
) -> Iterator[None]:
    """Log *message* at debug level with the time spent inside the block."""

    started = monotonic()
    try:
        yield
    finally:
        logger.debug(message, extra={**(extra or {}), "duration_s": monotonic() - started})


@contextmanager
def request_scope(
    name: str,
    *,
    logger: Optional[logging.Logger] = None,
    extra: Optional[Mapping[str, object]] = None,
) -> Iterator[RequestContext]:
    logger = logger or logging.getLogger("routedoc.request")
    context = RequestContext(request_id=uuid.uuid4().hex)
    fields = {"request": name, "request_id": context.request_id, **(extra or {})}
    token = _ACTIVE.set(context)
    logger.info("request.start", extra=fields)
    try:
        yield context
    except Exception:
        logger.exception("request.error", extra=fields)
        raise
    finally:
        _ACTIVE.reset(token)
        logger.info(
            "request.finish",
            extra={**fields, "duration_s": context.elapsed, "counters": dict(context.counters)},
        )


def current_request() -> Optional[RequestContext]:
    return _ACTIVE.get()


def increment_counter(name: str, amount: int = 1) -> None:
    context = _ACTIVE.get()
    if context is not None:
        context.increment(name, amount)


__all__ = [
    "LOG_FORMAT",
    "RequestContext",
    "configure_root",
    "current_request",
    "increment_counter",
    "request_scope",
    "scoped_timer",
]
