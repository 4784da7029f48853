"""Tests for the extraction pipeline."""
import asyncio
import json
from unittest.mock import patch

import fitz
import pytest

from docpipeline.adapters.base import ModelInvoker
from docpipeline.config import PipelineConfig
from docpipeline.errors import DocumentReadError, ModelInvocationError
from docpipeline.pdf import PdfText
from docpipeline.pipeline import extract_chunks, run_pipeline, run_pipeline_on_pages
from docpipeline.schemas import UNKNOWN, Hints, empty_extraction


class FakeInvoker(ModelInvoker):
    """In-memory invoker returning canned replies and tracking concurrency."""

    name = "fake"

    def __init__(self, reply=None, delay=0.0, fail_on=None):
        self.reply = reply or (lambda prompt: "{}")
        self.delay = delay
        self.fail_on = fail_on
        self.prompts = []
        self.active = 0
        self.peak = 0

    async def invoke(self, prompt: str) -> str:
        self.prompts.append(prompt)
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            await asyncio.sleep(self.delay)
            if self.fail_on and self.fail_on in prompt:
                raise ModelInvocationError("ollama exited with code 1", exit_code=1)
            return self.reply(prompt)
        finally:
            self.active -= 1

    async def is_available(self) -> bool:
        return True


def reply_for(prompt: str) -> str:
    """Answer with the page numbers found in the chunk."""
    chunk = prompt.split("DOCUMENT CHUNK:", 1)[1]
    if "PAGE 1 /" in chunk:
        return json.dumps(
            {
                "documentType": "Unknown",
                "authors": ["Jane Doe"],
                "date": "2021",
                "contentSummary": "First part.",
            }
        )
    return "Sure! " + json.dumps(
        {
            "documentType": "Review",
            "authors": ["John Smith", "Jane Doe"],
            "findingsSummary": "Later part.",
        }
    )


@pytest.fixture
def config():
    """Create a small-budget config."""
    return PipelineConfig(chunk_target_chars=60, max_concurrency=2)


@pytest.mark.asyncio
async def test_run_pipeline_on_pages_merges_chunks(config):
    """Test chunks are extracted and merged in chunk order."""
    pages = ["a" * 30, "b" * 30, "c" * 30]
    invoker = FakeInvoker(reply=reply_for)

    result = await run_pipeline_on_pages(pages, config, invoker)

    assert len(invoker.prompts) == 3
    assert result.document_type == "Review"
    assert result.authors == ["Jane Doe", "John Smith"]
    assert result.date == "2021"
    assert result.content_summary == "First part."
    assert result.findings_summary == "Later part."
    assert result.methods_summary == UNKNOWN


@pytest.mark.asyncio
async def test_concurrency_is_capped():
    """Test no more than max_concurrency invocations run at once."""
    config = PipelineConfig(chunk_target_chars=10, max_concurrency=3)
    invoker = FakeInvoker(delay=0.01)

    await run_pipeline_on_pages([f"page {i}" for i in range(10)], config, invoker)

    assert len(invoker.prompts) == 10
    assert invoker.peak == 3


@pytest.mark.asyncio
async def test_results_follow_chunk_order_not_completion_order():
    """Test result order matches chunk order when later chunks finish first."""

    class SlowFirstInvoker(FakeInvoker):
        async def invoke(self, prompt: str) -> str:
            index = int(prompt.rsplit("chunk-", 1)[1])
            await asyncio.sleep(0.03 if index == 0 else 0.0)
            return json.dumps({"date": f"date-{index}"})

    chunks = [f"chunk-{i}" for i in range(4)]
    results = await extract_chunks(
        chunks, Hints(), SlowFirstInvoker(), PipelineConfig(max_concurrency=4)
    )

    assert [r.date for r in results] == ["date-0", "date-1", "date-2", "date-3"]


@pytest.mark.asyncio
async def test_invocation_failure_fails_document(config):
    """Test one failing chunk invocation fails the whole run."""
    pages = ["a" * 30, "b" * 30, "FAILME" + "c" * 30]
    invoker = FakeInvoker(fail_on="FAILME")

    with pytest.raises(ModelInvocationError):
        await run_pipeline_on_pages(pages, config, invoker)


@pytest.mark.asyncio
async def test_zero_pages_dispatches_one_chunk(config):
    """Test an empty document still runs one invocation and completes."""
    invoker = FakeInvoker(reply=lambda prompt: "")

    result = await run_pipeline_on_pages([], config, invoker)

    assert len(invoker.prompts) == 1
    assert invoker.prompts[0].endswith("DOCUMENT CHUNK:")
    assert result == empty_extraction()


@pytest.mark.asyncio
async def test_max_chunks_drops_trailing_chunks():
    """Test the chunk cap limits how many chunks are sent."""
    config = PipelineConfig(chunk_target_chars=10, max_chunks=2)
    invoker = FakeInvoker()

    await run_pipeline_on_pages(["p1", "p2", "p3", "p4"], config, invoker)

    assert len(invoker.prompts) == 2
    assert "PAGE 1 / 4" in invoker.prompts[0]
    assert "PAGE 2 / 4" in invoker.prompts[1]


@pytest.mark.asyncio
async def test_author_hints_used_when_model_finds_none(config):
    """Test heuristic authors replace an empty merged author list."""
    pages = ["Authors: Ada Lovelace, Alan Turing\nAbstract\nText."]
    invoker = FakeInvoker(reply=lambda prompt: '{"documentType": "Essay"}')

    result = await run_pipeline_on_pages(pages, config, invoker)

    assert result.authors == ["Ada Lovelace", "Alan Turing"]
    assert "Possible Authors: Ada Lovelace, Alan Turing" in invoker.prompts[0]


@pytest.mark.asyncio
async def test_author_hints_do_not_override_model(config):
    """Test model authors take precedence over heuristic hints."""
    pages = ["Authors: Ada Lovelace\nAbstract\nText."]
    invoker = FakeInvoker(reply=lambda prompt: '{"authors": ["Grace Hopper"]}')

    result = await run_pipeline_on_pages(pages, config, invoker)

    assert result.authors == ["Grace Hopper"]


@pytest.mark.asyncio
async def test_default_invoker_built_from_config(config):
    """Test the invoker is built from the config when not supplied."""
    fake = FakeInvoker()

    with patch("docpipeline.pipeline.get_invoker", return_value=fake) as mock_get:
        await run_pipeline_on_pages(["text"], config)

    mock_get.assert_called_once_with(config)
    assert len(fake.prompts) == 1


@pytest.mark.asyncio
async def test_run_pipeline_reads_pdf(tmp_path, config):
    """Test the full pipeline on a generated PDF."""
    pdf_path = tmp_path / "paper.pdf"
    doc = fitz.open()
    doc.new_page().insert_text((72, 72), "A Study of Generated Documents\nAbstract\nShort.")
    doc.new_page().insert_text((72, 72), "Methods and results.")
    doc.save(str(pdf_path))
    doc.close()

    invoker = FakeInvoker(reply=lambda prompt: '{"documentType": "Research Article"}')
    result = await run_pipeline(pdf_path, config, invoker)

    assert result.document_type == "Research Article"
    assert "A Study of Generated Documents" in invoker.prompts[0]
    assert "Possible Title: A Study of Generated Documents" in invoker.prompts[0]


@pytest.mark.asyncio
async def test_run_pipeline_missing_file(tmp_path, config):
    """Test a missing PDF raises DocumentReadError before any invocation."""
    invoker = FakeInvoker()

    with pytest.raises(DocumentReadError):
        await run_pipeline(tmp_path / "missing.pdf", config, invoker)

    assert invoker.prompts == []


@pytest.mark.asyncio
async def test_run_pipeline_warns_on_scanned(config, caplog):
    """Test a text-light PDF logs a scanned-document warning but still runs."""
    scanned = PdfText(full_text="tiny", pages=["tiny"], num_pages=1)

    with patch("docpipeline.pipeline.extract_pdf_text", return_value=scanned):
        with caplog.at_level("WARNING", logger="docpipeline.pipeline"):
            result = await run_pipeline("scan.pdf", config, FakeInvoker())

    assert "possibly scanned" in caplog.text
    assert result.document_type == UNKNOWN
