"""Общие контракты PowerOCR (Pydantic v2)."""

from .contracts import (
    ContractValidationError,
    Language,
    PreprocessingOptions,
    RenderOptions,
    primary_subtag,
    uses_whitespace_joining,
)

__all__ = [
    "ContractValidationError",
    "Language",
    "PreprocessingOptions",
    "RenderOptions",
    "primary_subtag",
    "uses_whitespace_joining",
]
