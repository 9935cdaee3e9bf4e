"""Middleware chain assembly."""

from __future__ import annotations

from functools import reduce
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..ports.middleware import IMiddleware


def build_pipeline(
    middlewares: list[IMiddleware],
    handler_fn: Callable[[Any], Awaitable[Any]],
) -> Callable[[Any], Awaitable[Any]]:
    """Wrap *handler_fn* so that ``middlewares[0]`` runs first and the
    handler runs last."""
    return reduce(_wrap, reversed(middlewares), handler_fn)


def _wrap(
    inner: Callable[[Any], Awaitable[Any]], middleware: IMiddleware
) -> Callable[[Any], Awaitable[Any]]:
    async def step(message: Any) -> Any:
        return await middleware(message, inner)

    return step
