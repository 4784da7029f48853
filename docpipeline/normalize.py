"""Reshape an extraction into display sections."""

import re

from docpipeline.schemas import Extraction, NormalizedResult, NormalizedSection

_ET_AL_RE = re.compile(r"et al\.", re.IGNORECASE)


def split_into_bullets(text: str) -> list[str]:
    """Split a summary into unique sentences, case-insensitively."""
    if not text:
        return []

    normalized = re.sub(r"\. *,", ". ", text)
    sentences = (s.strip() for s in re.split(r"(?<=[.!?])\s+", normalized))

    seen: set[str] = set()
    bullets = []
    for sentence in sentences:
        key = sentence.lower()
        if sentence and key not in seen:
            seen.add(key)
            bullets.append(sentence)
    return bullets


def dedupe_authors(authors: list[str]) -> list[str]:
    """Drop blank and "et al." entries and case-insensitive duplicates."""
    seen: set[str] = set()
    unique = []
    for author in authors:
        author = (author or "").strip()
        key = author.lower()
        if author and not _ET_AL_RE.search(author) and key not in seen:
            seen.add(key)
            unique.append(author)
    return unique


def normalize_result(raw: Extraction) -> NormalizedResult:
    """Build the display form of an extraction.

    Args:
        raw: Merged extraction

    Returns:
        NormalizedResult with one bullet section per summary field
    """
    return NormalizedResult(
        document_type=raw.document_type,
        year=raw.date,
        authors=dedupe_authors(raw.authors),
        sections=[
            NormalizedSection(
                id="content", title="Content Summary", bullets=split_into_bullets(raw.content_summary)
            ),
            NormalizedSection(
                id="methods", title="Methods Summary", bullets=split_into_bullets(raw.methods_summary)
            ),
            NormalizedSection(
                id="findings",
                title="Findings Summary",
                bullets=split_into_bullets(raw.findings_summary),
            ),
            NormalizedSection(
                id="conclusions",
                title="Conclusions Summary",
                bullets=split_into_bullets(raw.conclusions_summary),
            ),
        ],
    )
