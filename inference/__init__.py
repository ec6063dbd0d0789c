"""
Model boundary layer for the answer oracle.

This package provides a clean abstraction for text completion,
allowing the gateway to remain agnostic of the underlying backend.

Supported backends:
- StubModelBackend: Deterministic fake model (default for CI/tests)
- GeminiModelBackend: Google Generative Language REST API
- OllamaModelBackend: Local Ollama inference

Example usage:
    from inference import AnswerOracle, StubModelBackend

    oracle = AnswerOracle(StubModelBackend())
    answer = await oracle.ask("Can I protest?")
"""

from .types import ModelRequest, ModelResponse, ModelStatus
from .base import ModelBackend
from .stub import StubModelBackend, UnavailableModelBackend
from .gemini import GeminiModelBackend
from .ollama import OllamaModelBackend
from .prompting import DEFAULT_PROMPT_TEMPLATE, build_prompt
from .oracle import AnswerOracle, OracleUnavailableError

__all__ = [
    "ModelRequest",
    "ModelResponse",
    "ModelStatus",
    "ModelBackend",
    "StubModelBackend",
    "UnavailableModelBackend",
    "GeminiModelBackend",
    "OllamaModelBackend",
    "DEFAULT_PROMPT_TEMPLATE",
    "build_prompt",
    "AnswerOracle",
    "OracleUnavailableError",
]
