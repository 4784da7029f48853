"""Merge per-chunk extractions into one record."""

from docpipeline.schemas import UNKNOWN, Extraction

SUMMARY_KEY_CHARS = 200


def merge_authors(extractions: list[Extraction]) -> list[str]:
    """Union of all authors, first-seen order, exact-string dedup."""
    authors: dict[str, None] = {}
    for extraction in extractions:
        for author in extraction.authors:
            if author and author != UNKNOWN:
                authors.setdefault(author, None)
    return list(authors)


def pick_first(values: list[str]) -> str:
    """Return the first value that is not blank or "unknown" (any case)."""
    for value in values:
        value = (value or "").strip()
        if value and value.lower() != UNKNOWN.lower():
            return value
    return UNKNOWN


def join_unique(values: list[str]) -> str:
    """Join distinct values with a space, keyed on their first 200 characters."""
    seen: set[str] = set()
    parts: list[str] = []
    for value in values:
        key = (value or "")[:SUMMARY_KEY_CHARS]
        if value and value != UNKNOWN and key not in seen:
            seen.add(key)
            parts.append(value)
    return " ".join(parts) if parts else UNKNOWN


def merge_extractions(extractions: list[Extraction]) -> Extraction:
    """Combine chunk extractions, given in chunk order, into one.

    Args:
        extractions: One Extraction per chunk

    Returns:
        Merged Extraction
    """
    return Extraction(
        document_type=pick_first([e.document_type for e in extractions]),
        authors=merge_authors(extractions),
        date=pick_first([e.date for e in extractions]),
        content_summary=join_unique([e.content_summary for e in extractions]),
        methods_summary=join_unique([e.methods_summary for e in extractions]),
        findings_summary=join_unique([e.findings_summary for e in extractions]),
        conclusions_summary=join_unique([e.conclusions_summary for e in extractions]),
    )
