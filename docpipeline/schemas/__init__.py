"""Schemas for extraction records and their display form."""

from docpipeline.schemas.extraction import (
    PROMPT,
    UNKNOWN,
    Extraction,
    Hints,
    empty_extraction,
)
from docpipeline.schemas.normalized import NormalizedResult, NormalizedSection

__all__ = [
    "PROMPT",
    "UNKNOWN",
    "Extraction",
    "Hints",
    "NormalizedResult",
    "NormalizedSection",
    "empty_extraction",
]
