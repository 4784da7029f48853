"""Cheap title and author guesses from the first lines of a paper.

These are hints for the model only. Nothing here is validated.
"""

import re

_HEADING_RE = re.compile(r"^(abstract|introduction)\b", re.IGNORECASE)
_AUTHOR_LABEL_RE = re.compile(r"\b(?:by|authors?)\s*[:\-]\s*(.+)$", re.IGNORECASE)
_NAME_RE = re.compile(r"\b[A-Z][a-z]+(?:[ \t][A-Z]\.)?(?:[ \t][A-Z][a-z]+(?:-[A-Z][a-z]+)?)+\b")
_FOOTNOTE_RE = re.compile(r"[\d*]+")

MAX_TITLE_LINES = 5
MAX_AUTHOR_LINES = 60
MAX_AUTHORS = 12


def _lines(text: str) -> list[str]:
    return [line.strip() for line in re.split(r"\r?\n", text) if line.strip()]


def heuristic_extract_title(text: str) -> str | None:
    """Guess the title from the lines above the Abstract/Introduction heading.

    Args:
        text: Leading text of the document

    Returns:
        First candidate line 9-219 characters long, or None
    """
    lines = _lines(text)
    heading = next((i for i, line in enumerate(lines) if _HEADING_RE.match(line)), -1)

    limit = min(heading, MAX_TITLE_LINES) if heading > 0 else MAX_TITLE_LINES
    candidates = [line for line in lines[:limit] if 8 < len(line) < 220]
    return candidates[0] if candidates else None


def heuristic_extract_authors(text: str) -> list[str]:
    """Guess author names from the first lines of the document.

    An explicit "By:" / "Authors:" label wins. Otherwise capitalized
    name-like word runs are collected.

    Args:
        text: Leading text of the document

    Returns:
        Up to 12 candidate names in order of appearance
    """
    head = re.split(r"\r?\n", text)[:MAX_AUTHOR_LINES]

    for line in head:
        match = _AUTHOR_LABEL_RE.search(line)
        if match:
            parts = re.split(r"[,;]+", match.group(1))
            names = (_FOOTNOTE_RE.sub("", part).strip() for part in parts)
            return [name for name in names if name]

    seen: set[str] = set()
    authors: list[str] = []
    # Names never span a line break
    for line in head:
        for candidate in _NAME_RE.findall(line):
            key = candidate.lower()
            if key not in seen:
                seen.add(key)
                authors.append(candidate)
    return authors[:MAX_AUTHORS]
