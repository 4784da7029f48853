"""Document extraction pipeline: pages -> hints -> chunks -> model -> merge."""

import asyncio
import logging
from pathlib import Path

from docpipeline.adapters import ModelInvoker, get_invoker
from docpipeline.chunking import chunk_pages
from docpipeline.config import PipelineConfig
from docpipeline.extraction import extract_chunk
from docpipeline.hints import heuristic_extract_authors, heuristic_extract_title
from docpipeline.merge import merge_extractions
from docpipeline.pdf import extract_pdf_text, needs_ocr
from docpipeline.schemas import Extraction, Hints

logger = logging.getLogger(__name__)


def compute_hints(pages: list[str]) -> Hints:
    """Guess title and authors from the first two pages, else the whole text.

    Args:
        pages: Page texts in document order

    Returns:
        Hints for the prompt
    """
    first_two = "\n".join(pages[:2])
    whole = "\n".join(pages)

    title = heuristic_extract_title(first_two) or heuristic_extract_title(whole)
    authors = heuristic_extract_authors(first_two) or heuristic_extract_authors(whole)
    return Hints(title=title, authors=authors)


async def extract_chunks(
    chunks: list[str], hints: Hints, invoker: ModelInvoker, config: PipelineConfig
) -> list[Extraction]:
    """Run extraction on every chunk with at most ``max_concurrency`` in flight.

    Args:
        chunks: Chunk texts in document order
        hints: Hints shared by all chunks
        invoker: Inference backend
        config: Pipeline settings

    Returns:
        One Extraction per chunk, in chunk order

    Raises:
        ModelInvocationError: Any chunk's invocation failed
    """
    semaphore = asyncio.Semaphore(config.max_concurrency)
    done = 0

    async def process(chunk: str) -> Extraction:
        nonlocal done
        async with semaphore:
            result = await extract_chunk(invoker, chunk, hints, config.prompt_max_chars)
        done += 1
        logger.info(f"Completed chunk {done}/{len(chunks)}")
        return result

    return await asyncio.gather(*(process(chunk) for chunk in chunks))


async def run_pipeline_on_pages(
    pages: list[str],
    config: PipelineConfig | None = None,
    invoker: ModelInvoker | None = None,
) -> Extraction:
    """Extract one merged record from already-extracted page texts.

    Args:
        pages: Page texts in document order
        config: Pipeline settings; read from the environment when omitted
        invoker: Inference backend; built from config when omitted

    Returns:
        Final merged Extraction
    """
    config = config or PipelineConfig.from_env()
    invoker = invoker or get_invoker(config)

    hints = compute_hints(pages)
    logger.debug(f"Hints: title={hints.title!r}, authors={hints.authors}")

    chunks = chunk_pages(pages, config.chunk_target_chars)
    if config.max_chunks > 0:
        chunks = chunks[: config.max_chunks]
    logger.info(
        f"Chunked into {len(chunks)} chunk(s) (~{config.chunk_target_chars} chars target each)"
    )

    try:
        per_chunk = await extract_chunks(chunks, hints, invoker, config)
    except Exception as e:
        logger.error(f"Chunk extraction failed: {e}")
        raise

    merged = merge_extractions(per_chunk)

    if not merged.authors and hints.authors:
        merged = merged.model_copy(update={"authors": list(hints.authors)})

    return merged


async def run_pipeline(
    path: str | Path,
    config: PipelineConfig | None = None,
    invoker: ModelInvoker | None = None,
) -> Extraction:
    """Extract structured metadata from a PDF.

    Args:
        path: Path to the PDF
        config: Pipeline settings; read from the environment when omitted
        invoker: Inference backend; built from config when omitted

    Returns:
        Final merged Extraction

    Raises:
        DocumentReadError: The PDF could not be read
        ModelInvocationError: Any chunk's invocation failed
    """
    logger.info(f"Reading PDF: {path}")
    # PyMuPDF is synchronous; keep the event loop free
    pdf = await asyncio.to_thread(extract_pdf_text, path)

    if needs_ocr(pdf.pages):
        logger.warning("PDF looks text-light (possibly scanned). OCR not enabled.")
    logger.info(f"Pages detected: {len(pdf.pages)}")

    return await run_pipeline_on_pages(pdf.pages, config, invoker)
