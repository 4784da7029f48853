"""Ollama HTTP backend for in-process model invocation."""

import logging

import httpx

from docpipeline.adapters.base import ModelInvoker
from docpipeline.errors import ModelInvocationError

logger = logging.getLogger(__name__)


class OllamaHTTPInvoker(ModelInvoker):
    """Invoke a local model through the Ollama REST API."""

    name = "ollama-http"

    def __init__(
        self,
        model: str = "mistral",
        base_url: str = "http://localhost:11434",
        timeout: float = 300.0,
    ):
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def invoke(self, prompt: str) -> str:
        """Generate a non-streamed JSON-mode completion."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/api/generate",
                    json={
                        "model": self.model,
                        "prompt": prompt,
                        "stream": False,
                        "format": "json",
                    },
                )
                response.raise_for_status()
                result = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Ollama returned HTTP {e.response.status_code} for model {self.model}")
            raise ModelInvocationError(
                f"Ollama returned HTTP {e.response.status_code}: {e.response.text}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Ollama request failed: {e}")
            raise ModelInvocationError(f"Ollama request failed: {e}") from e

        if not isinstance(result, dict):
            logger.error(f"Ollama returned a non-object body: {type(result).__name__}")
            raise ModelInvocationError(
                f"Ollama returned an unexpected response body: {type(result).__name__}"
            )

        return str(result.get("response", "")).strip()

    async def is_available(self) -> bool:
        """Check if Ollama is reachable."""
        try:
            async with httpx.AsyncClient(timeout=5.0) as client:
                response = await client.get(f"{self.base_url}/api/tags")
                return response.status_code == 200
        except Exception as e:
            logger.warning(f"Ollama availability check failed: {e}")
            return False
