"""Prompt construction for chunk extraction."""

from docpipeline.schemas import PROMPT, UNKNOWN, Hints


def trim_for_prompt(text: str, max_chars: int = 12000) -> str:
    """Hard-truncate text to ``max_chars``, noting how much was dropped."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + f"\n\n[TRUNCATED: {len(text) - max_chars} more chars]"


def build_prompt(chunk_text: str, hints: Hints, max_chars: int = 9000) -> str:
    """Build the extraction prompt for one chunk.

    Args:
        chunk_text: Chunk text including page markers
        hints: Heuristic title/author guesses
        max_chars: Truncation limit applied to the chunk text

    Returns:
        Prompt string
    """
    return PROMPT.format(
        title=hints.title or UNKNOWN,
        authors=", ".join(hints.authors) or UNKNOWN,
        text=trim_for_prompt(chunk_text, max_chars),
    ).strip()
