"""Page-bounded chunking of document text."""


def page_marker(index: int, total: int) -> str:
    """Return the boundary marker placed before page ``index`` (0-based)."""
    return f"\n\n===== PAGE {index + 1} / {total} =====\n"


def chunk_pages(pages: list[str], target_chars: int = 9000) -> list[str]:
    """Group whole pages into chunks of roughly ``target_chars`` characters.

    Each page is prefixed with a page marker. A chunk is closed before a page
    that would push it past the budget, so pages are never split and a page
    larger than the budget becomes a chunk of its own.

    Args:
        pages: Page texts in document order
        target_chars: Character budget per chunk, markers included

    Returns:
        List of chunk texts; a single empty chunk when there are no pages
    """
    if not pages:
        return [""]

    total = len(pages)
    chunks: list[str] = []
    current = ""

    for i, page in enumerate(pages):
        block = page_marker(i, total) + page

        if current and len(current) + len(block) > target_chars:
            chunks.append(current)
            current = ""

        current += block

    if current:
        chunks.append(current)
    return chunks
