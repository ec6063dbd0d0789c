from typing import Optional

from .base import ModelBackend
from .types import ModelRequest, ModelResponse


class StubModelBackend(ModelBackend):
    """
    Deterministic fake model for testing and CI.

    Fast, deterministic, and never fails silently.
    Records every request it receives in `requests`.
    """

    name = "stub"

    def __init__(self, output: Optional[str] = "This is a stubbed response."):
        self.output = output
        self.requests = []

    def generate(self, request: ModelRequest) -> ModelResponse:
        """
        Generate a deterministic response based on task type.

        Args:
            request: ModelRequest with task and prompt

        Returns:
            ModelResponse with the configured output, or a recoverable
            error for task "fail"
        """
        self.requests.append(request)

        if request.task == "fail":
            return ModelResponse(
                status="recoverable_error",
                error_type="invalid_output",
                metadata={"backend": "stub", "trace_id": request.trace_id}
            )

        return ModelResponse(
            status="success",
            output=self.output,
            metadata={"backend": "stub", "trace_id": request.trace_id}
        )


class UnavailableModelBackend(ModelBackend):
    """Backend that is always down. Used to exercise degraded replies."""

    name = "unavailable"

    def __init__(self, error_type: str = "backend_unavailable"):
        self.error_type = error_type

    def generate(self, request: ModelRequest) -> ModelResponse:
        return ModelResponse(
            status="fatal_error",
            error_type=self.error_type,
            metadata={"backend": "unavailable", "trace_id": request.trace_id}
        )
