"""Single-chunk extraction: prompt, invoke, reconcile."""

from docpipeline.adapters.base import ModelInvoker
from docpipeline.prompts import build_prompt
from docpipeline.reconcile import reconcile
from docpipeline.schemas import Extraction, Hints


async def extract_chunk(
    invoker: ModelInvoker, chunk_text: str, hints: Hints, max_chars: int = 9000
) -> Extraction:
    """Extract metadata from one chunk.

    Args:
        invoker: Inference backend
        chunk_text: Chunk text
        hints: Heuristic title/author guesses
        max_chars: Prompt truncation limit for the chunk text

    Returns:
        Reconciled Extraction for the chunk

    Raises:
        ModelInvocationError: The backend call failed
    """
    prompt = build_prompt(chunk_text, hints, max_chars)
    reply = await invoker.invoke(prompt)
    return reconcile(reply)
