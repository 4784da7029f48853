import os

from pydantic import BaseModel, Field


def _int_env(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to default."""
    raw = os.environ.get(name, "").strip()
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _float_env(name: str, default: float) -> float:
    """Read a positive number from the environment, falling back to default."""
    raw = os.environ.get(name, "").strip()
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


OLLAMA_MODEL = os.environ.get("OLLAMA_MODEL", "") or "mistral"
OLLAMA_BIN = os.environ.get("OLLAMA_BIN", "") or "ollama"
OLLAMA_URL = os.environ.get("OLLAMA_URL", "http://localhost:11434")
OLLAMA_TIMEOUT = _float_env("OLLAMA_TIMEOUT", 300.0)

EXTRACTOR_PROVIDER = os.environ.get("EXTRACTOR_PROVIDER", "ollama-cli")

DOC_CHUNK_TARGET = _int_env("DOC_CHUNK_TARGET", 9000)
DOC_CONCURRENCY = _int_env("DOC_CONCURRENCY", 3)
# 0 means unlimited
DOC_MAX_CHUNKS = _int_env("DOC_MAX_CHUNKS", 0)
DOC_PROMPT_MAX_CHARS = _int_env("DOC_PROMPT_MAX_CHARS", 9000)


class PipelineConfig(BaseModel):
    """Settings for a single pipeline run."""

    chunk_target_chars: int = Field(default=9000, gt=0)
    max_concurrency: int = Field(default=3, gt=0)
    max_chunks: int = Field(default=0, ge=0)
    model_id: str = Field(default="mistral", min_length=1)
    prompt_max_chars: int = Field(default=9000, gt=0)
    provider: str = "ollama-cli"
    ollama_bin: str = "ollama"
    ollama_url: str = "http://localhost:11434"
    ollama_timeout: float = Field(default=300.0, gt=0)

    @classmethod
    def from_env(cls, **overrides) -> "PipelineConfig":
        """Build a config from the environment-derived defaults.

        Args:
            **overrides: Field values that take precedence over the environment;
                ``None`` values are ignored

        Returns:
            Validated PipelineConfig
        """
        values = {
            "chunk_target_chars": DOC_CHUNK_TARGET,
            "max_concurrency": DOC_CONCURRENCY,
            "max_chunks": DOC_MAX_CHUNKS,
            "model_id": OLLAMA_MODEL,
            "prompt_max_chars": DOC_PROMPT_MAX_CHARS,
            "provider": EXTRACTOR_PROVIDER,
            "ollama_bin": OLLAMA_BIN,
            "ollama_url": OLLAMA_URL,
            "ollama_timeout": OLLAMA_TIMEOUT,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
