"""
Command line entry point.

    docpipeline extract paper.pdf
    docpipeline extract paper.pdf --model llama3 --concurrency 2
    docpipeline check
"""

import asyncio
import json
import logging
from pathlib import Path

import typer

from docpipeline.adapters import get_invoker
from docpipeline.config import PipelineConfig
from docpipeline.normalize import normalize_result
from docpipeline.pipeline import run_pipeline

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="docpipeline",
    help="Extract structured metadata from scientific PDFs with a local LLM.",
)


def _emit(payload: dict) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command("extract")
def extract(
    pdf: Path = typer.Argument(..., help="Path to the PDF file"),
    model: str | None = typer.Option(None, "--model", "-m", help="Model identifier"),
    provider: str | None = typer.Option(
        None, "--provider", help="Backend: ollama-cli or ollama-http"
    ),
    concurrency: int | None = typer.Option(
        None, "--concurrency", "-c", min=1, help="Concurrent model invocations"
    ),
    chunk_target: int | None = typer.Option(
        None, "--chunk-target", min=1, help="Target characters per chunk"
    ),
    max_chunks: int | None = typer.Option(
        None, "--max-chunks", min=0, help="Process at most N chunks (0 = all)"
    ),
) -> None:
    """Run the pipeline on a PDF and print the result envelope as JSON."""
    if not pdf.is_file():
        _emit({"status": "error", "error": f"File not found: {pdf}"})
        raise typer.Exit(code=2)

    config = PipelineConfig.from_env(
        model_id=model,
        provider=provider,
        max_concurrency=concurrency,
        chunk_target_chars=chunk_target,
        max_chunks=max_chunks,
    )

    try:
        extraction = asyncio.run(run_pipeline(pdf, config))
    except Exception as e:
        logger.error(f"Extraction failed for {pdf}: {e}", exc_info=True)
        _emit({"status": "error", "error": str(e) or "Unexpected error"})
        raise typer.Exit(code=1)

    _emit(
        {
            "status": "success",
            "raw": extraction.model_dump(by_alias=True),
            "normalized": normalize_result(extraction).model_dump(by_alias=True),
        }
    )


@app.command("check")
def check(
    provider: str | None = typer.Option(None, "--provider", help="Backend to check"),
) -> None:
    """Report whether the configured inference backend is available."""
    config = PipelineConfig.from_env(provider=provider)
    invoker = get_invoker(config)
    available = asyncio.run(invoker.is_available())
    typer.echo(f"{invoker.name} ({config.model_id}): {'available' if available else 'unavailable'}")
    if not available:
        raise typer.Exit(code=1)


def main():
    """Entry point for the docpipeline CLI."""
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s"
    )
    app()


if __name__ == "__main__":
    main()
