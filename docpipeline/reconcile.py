"""Turn unreliable model replies into schema-valid extraction records."""

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from docpipeline.errors import MalformedOutputError
from docpipeline.schemas import UNKNOWN, Extraction, empty_extraction

logger = logging.getLogger(__name__)

_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)

# Canonical field -> accepted keys, consulted in order; first present key wins.
FIELD_ALIASES: list[tuple[str, tuple[str, ...]]] = [
    ("documentType", ("documentType", "type", "articleType", "title")),
    ("authors", ("authors", "author", "author_list")),
    ("date", ("date", "year", "publication_date")),
    ("contentSummary", ("contentSummary", "abstract", "summary")),
    ("methodsSummary", ("methodsSummary", "methods", "methodology")),
    ("findingsSummary", ("findingsSummary", "findings", "results")),
    ("conclusionsSummary", ("conclusionsSummary", "conclusions", "conclusion")),
]

_QUOTE_TABLE = str.maketrans({"“": '"', "”": '"', "‘": "'", "’": "'"})


def _loads_object(text: str) -> dict:
    try:
        value = json.loads(text)
    except (ValueError, RecursionError) as e:
        # Very deep nesting exhausts the decoder's recursion limit
        raise MalformedOutputError(str(e)) from e
    if not isinstance(value, dict):
        raise MalformedOutputError(f"expected a JSON object, got {type(value).__name__}")
    return value


def extract_json_object(text: str) -> dict:
    """Parse the outermost ``{...}`` span of text.

    Raises:
        MalformedOutputError: No brace span, or it is not a JSON object
    """
    match = _OBJECT_RE.search(text)
    if not match:
        raise MalformedOutputError("no JSON object found")
    return _loads_object(match.group(0))


def parse_reply(text: str) -> dict:
    """Parse a reply as JSON, falling back to the embedded brace span.

    Raises:
        MalformedOutputError: Neither attempt produced a JSON object
    """
    try:
        return _loads_object(text)
    except MalformedOutputError:
        return extract_json_object(text)


def clean_reply(text: str) -> str:
    """Straighten curly quotes and collapse all whitespace to single spaces."""
    return re.sub(r"\s+", " ", text.translate(_QUOTE_TABLE))


def _lookup(obj: dict, keys: tuple[str, ...]) -> Any:
    for key in keys:
        if obj.get(key) is not None:
            return obj[key]
    return None


def _as_text(value: Any) -> str:
    if value is None or value is False:
        return UNKNOWN
    if isinstance(value, list):
        text = ", ".join(str(v).strip() for v in value if v is not None)
    elif isinstance(value, dict):
        text = json.dumps(value)
    else:
        text = str(value)
    return text.strip() or UNKNOWN


def _as_authors(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        names = (str(v).strip() for v in value if v is not None)
    else:
        names = (s.strip() for s in re.split(r"[,;]+", str(value)))
    return [name for name in names if name]


def normalize_fields(obj: dict) -> dict:
    """Map alias keys onto the canonical extraction fields.

    Args:
        obj: Parsed model reply

    Returns:
        Dictionary keyed by the canonical (camelCase) field names
    """
    normalized = {}
    for field, keys in FIELD_ALIASES:
        value = _lookup(obj, keys)
        normalized[field] = _as_authors(value) if field == "authors" else _as_text(value)
    return normalized


def _validated(obj: dict) -> Extraction | None:
    try:
        return Extraction.model_validate(normalize_fields(obj))
    except ValidationError as e:
        logger.debug(f"Normalized reply failed validation: {e}")
        return None


def reconcile(raw: str) -> Extraction:
    """Produce a valid Extraction from a raw model reply. Never raises.

    Tries a direct parse, then the embedded brace span, then the same after
    quote/whitespace cleanup. If nothing yields a valid record the all-Unknown
    record is returned.

    Args:
        raw: Full text reply from one model invocation

    Returns:
        Schema-valid Extraction
    """
    raw = raw or ""

    try:
        result = _validated(parse_reply(raw))
        if result is not None:
            return result
    except MalformedOutputError as e:
        logger.debug(f"Direct parse failed, attempting repair: {e}")

    try:
        result = _validated(extract_json_object(clean_reply(raw)))
        if result is not None:
            return result
    except MalformedOutputError as e:
        logger.warning(f"Could not recover JSON from model reply ({len(raw)} chars): {e}")

    return empty_extraction()
