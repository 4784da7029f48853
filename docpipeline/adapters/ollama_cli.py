"""Ollama command-line backend: one ``ollama run`` process per prompt."""

import asyncio
import logging
import shutil

from docpipeline.adapters.base import ModelInvoker
from docpipeline.errors import ModelInvocationError

logger = logging.getLogger(__name__)


class OllamaCLIInvoker(ModelInvoker):
    """Invoke a local model by spawning the Ollama CLI."""

    name = "ollama-cli"

    def __init__(self, model: str = "mistral", binary: str = "ollama"):
        self.model = model
        self.binary = binary

    async def invoke(self, prompt: str) -> str:
        """Pipe the prompt to ``ollama run <model>`` and return its stdout."""
        try:
            proc = await asyncio.create_subprocess_exec(
                self.binary,
                "run",
                self.model,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ModelInvocationError(f"Failed to start {self.binary}: {e}") from e

        stdout, stderr = await proc.communicate(prompt.encode("utf-8"))
        err = stderr.decode("utf-8", errors="replace").strip()

        if proc.returncode != 0:
            logger.error(f"{self.binary} run {self.model} exited with code {proc.returncode}")
            raise ModelInvocationError(
                err or f"{self.binary} exited with code {proc.returncode}",
                exit_code=proc.returncode,
                stderr=err,
            )

        return stdout.decode("utf-8", errors="replace").strip()

    async def is_available(self) -> bool:
        """Check if the Ollama binary is on PATH."""
        return shutil.which(self.binary) is not None
