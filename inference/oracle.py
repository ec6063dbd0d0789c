"""
Answer oracle adapter.

Turns a freeform question into a templated prompt, runs it through the
configured ModelBackend off the event loop, and returns the answer text
verbatim.

Backends report failure as a ModelResponse status. This adapter is the one
place where that status becomes OracleUnavailableError, so callers handle
exactly one failure type:

    try:
        answer = await oracle.ask(question)
    except OracleUnavailableError as e:
        ...  # degrade, e.kind says why
"""

import asyncio
import logging
from typing import Optional
from uuid import uuid4

from .base import ModelBackend
from .prompting import DEFAULT_PROMPT_TEMPLATE, build_prompt
from .types import ModelRequest, ModelResponse

logger = logging.getLogger(__name__)


class OracleUnavailableError(Exception):
    """
    The answer oracle could not produce usable text.

    kind is one of: timeout, backend_unavailable, invalid_output, empty_output
    """

    def __init__(self, message: str, kind: str = "backend_unavailable"):
        super().__init__(message)
        self.kind = kind


class AnswerOracle:
    """Fixed-template question answering over a ModelBackend."""

    def __init__(
        self,
        backend: ModelBackend,
        prompt_template: str = DEFAULT_PROMPT_TEMPLATE,
        timeout_s: Optional[float] = 30.0,
    ):
        """
        Args:
            backend: Text-completion backend
            prompt_template: Template with a {question} placeholder
            timeout_s: Upper bound on one ask(); None disables the bound
        """
        self.backend = backend
        self.prompt_template = prompt_template
        self.timeout_s = timeout_s

    async def ask(self, question: str) -> str:
        """
        Answer a question.

        Returns:
            The backend's text, unmodified

        Raises:
            OracleUnavailableError: Backend failed, timed out, or returned
                no usable text
        """
        request = ModelRequest(
            task="answer",
            prompt=build_prompt(question, self.prompt_template),
            timeout_s=self.timeout_s,
            trace_id=uuid4().hex,
        )

        loop = asyncio.get_running_loop()
        try:
            response: ModelResponse = await asyncio.wait_for(
                loop.run_in_executor(None, self.backend.generate, request),
                timeout=self.timeout_s,
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"Oracle timed out after {self.timeout_s}s (trace_id={request.trace_id})")
            raise OracleUnavailableError(
                f"Oracle did not answer within {self.timeout_s}s", kind="timeout"
            ) from e
        except Exception as e:
            # Backend broke its never-raise contract
            logger.error(f"Oracle backend raised: {e}", exc_info=True)
            raise OracleUnavailableError(f"Oracle backend raised: {e}") from e

        if not response.succeeded:
            kind = response.failure_kind
            logger.warning(
                f"Oracle backend {self.backend.name} returned {response.status} ({kind})",
                extra={"trace_id": request.trace_id, "error_type": kind},
            )
            raise OracleUnavailableError(f"Oracle backend returned {response.status}", kind=kind)

        if not response.has_text:
            raise OracleUnavailableError("Oracle returned no text", kind="empty_output")

        return response.output
