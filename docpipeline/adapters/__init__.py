"""Invoker factory and exports."""
from docpipeline.adapters.base import ModelInvoker
from docpipeline.config import PipelineConfig


def get_invoker(config: PipelineConfig) -> ModelInvoker:
    """Get the configured model invoker.

    Returns:
        ModelInvoker instance based on the config's provider
    """
    if config.provider == "ollama-http":
        from docpipeline.adapters.ollama import OllamaHTTPInvoker
        return OllamaHTTPInvoker(
            model=config.model_id,
            base_url=config.ollama_url,
            timeout=config.ollama_timeout,
        )
    else:
        # Default to the CLI
        from docpipeline.adapters.ollama_cli import OllamaCLIInvoker
        return OllamaCLIInvoker(model=config.model_id, binary=config.ollama_bin)


__all__ = ["ModelInvoker", "get_invoker"]
