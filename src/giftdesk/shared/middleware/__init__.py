"""Command pipeline middleware."""

from __future__ import annotations

from .logging import LoggingMiddleware
from .pipeline import build_pipeline
from .validation import ValidatorMiddleware

__all__ = ["LoggingMiddleware", "ValidatorMiddleware", "build_pipeline"]
