"""Command line interface for yaml_validator."""

from .report import ValidationResult
from .run_validate import load_context, main

__all__ = ["ValidationResult", "load_context", "main"]
