"""
Correlation and causation ids of the flow currently running.

A root command binds its correlation id for its whole dispatch; everything
built meanwhile (nested commands, domain events, background tasks) inherits
it, and the log filter stamps it on every record. Context variables keep
concurrent flows apart across ``await`` points.
"""

from __future__ import annotations

import contextlib
import uuid
from collections.abc import Iterator
from contextvars import ContextVar

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_causation_id: ContextVar[str | None] = ContextVar("causation_id", default=None)


def get_correlation_id() -> str | None:
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None) -> None:
    _correlation_id.set(correlation_id)


def get_causation_id() -> str | None:
    return _causation_id.get()


def set_causation_id(causation_id: str | None) -> None:
    _causation_id.set(causation_id)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


@contextlib.contextmanager
def correlation_scope(
    correlation_id: str | None, causation_id: str | None = None
) -> Iterator[None]:
    """Bind the ids for the duration of the block, then restore the previous ones.

    The causation id is only rebound when one is given.
    """
    correlation_token = _correlation_id.set(correlation_id)
    causation_token = (
        _causation_id.set(causation_id) if causation_id is not None else None
    )
    try:
        yield
    finally:
        if causation_token is not None:
            _causation_id.reset(causation_token)
        _correlation_id.reset(correlation_token)
