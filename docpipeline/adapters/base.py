"""Base interface for model invocation backends."""

from abc import ABC, abstractmethod


class ModelInvoker(ABC):
    """Abstract base class for inference backends.

    One call to ``invoke`` is one inference: no retries and no streaming.
    """

    name: str = "base"

    @abstractmethod
    async def invoke(self, prompt: str) -> str:
        """Run the model on a prompt.

        Args:
            prompt: Full prompt text

        Returns:
            The complete model reply, trimmed

        Raises:
            ModelInvocationError: The backend failed to produce a reply
        """
        pass

    @abstractmethod
    async def is_available(self) -> bool:
        """Check if the backend can be reached.

        Returns:
            True if available, False otherwise
        """
        pass
