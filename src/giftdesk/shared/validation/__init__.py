"""Command validation: results and the composite used by the pipeline."""

from __future__ import annotations

from .composite import CompositeValidator
from .result import ValidationResult

__all__ = ["CompositeValidator", "ValidationResult"]
