"""Validation module for verifying layout correctness."""

from rosterview.validation.validator import LayoutValidator, ValidationError

__all__ = [
    "LayoutValidator",
    "ValidationError",
]
