"""Extraction record schema for scientific papers."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

UNKNOWN = "Unknown"

NonEmptyStr = Annotated[str, Field(min_length=1)]


class Extraction(BaseModel):
    """Structured metadata for one document (or one chunk of it).

    Absent values use the "Unknown" sentinel, never an empty string.
    """

    model_config = ConfigDict(populate_by_name=True)

    document_type: NonEmptyStr = Field(alias="documentType")
    authors: list[NonEmptyStr]
    date: NonEmptyStr
    content_summary: NonEmptyStr = Field(alias="contentSummary")
    methods_summary: NonEmptyStr = Field(alias="methodsSummary")
    findings_summary: NonEmptyStr = Field(alias="findingsSummary")
    conclusions_summary: NonEmptyStr = Field(alias="conclusionsSummary")


class Hints(BaseModel):
    """Heuristic title/author guesses passed to the model as context."""

    title: str | None = None
    authors: list[str] = []


def empty_extraction() -> Extraction:
    """Return the all-"Unknown" record used when nothing could be recovered."""
    return Extraction(
        document_type=UNKNOWN,
        authors=[],
        date=UNKNOWN,
        content_summary=UNKNOWN,
        methods_summary=UNKNOWN,
        findings_summary=UNKNOWN,
        conclusions_summary=UNKNOWN,
    )


# Prompt template for per-chunk metadata extraction
PROMPT = """You extract metadata from SCIENTIFIC PAPERS. Work ONLY from the provided text.
Return ONE JSON object with EXACT keys:
documentType, authors (array of strings), date, contentSummary, methodsSummary, findingsSummary, conclusionsSummary.

Definitions:
- documentType: e.g., Research Article, Review, Case Report, RCT, Cohort Study, Systematic Review, etc.
- authors: list of person names only.
- date: publication year or date string if available; otherwise "Unknown".
- contentSummary: 2-4 short sentences about what the paper studies.
- methodsSummary: 2-4 short sentences (design, sample, measures, analysis).
- findingsSummary: 2-4 short sentences summarizing main empirical results.
- conclusionsSummary: 1-3 short sentences summarizing the authors' conclusions/implications.

Rules:
- Use "Unknown" ONLY if not present in this text.
- Do NOT invent data. Keep sentences concise.
- Reply with ONLY JSON (no prose, no markdown).

HINTS (may be wrong; verify with text):
- Possible Title: {title}
- Possible Authors: {authors}

DOCUMENT CHUNK:
{text}"""
