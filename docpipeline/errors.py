"""Exception types raised by the extraction pipeline."""


class PipelineError(Exception):
    """Base for all pipeline errors."""


class DocumentReadError(PipelineError):
    """The source document could not be opened or read."""


class ModelInvocationError(PipelineError):
    """The inference backend failed to produce a reply.

    exit_code is None when the process never ran (spawn failure) or the
    backend is not process based.
    """

    def __init__(self, message: str, *, exit_code: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr


class MalformedOutputError(PipelineError):
    """A model reply did not contain a parseable JSON object."""
