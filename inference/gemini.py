"""
Gemini backend (Google Generative Language REST API).

POST {base_url}/models/{model}:generateContent?key=...
ref: https://ai.google.dev/api/generate-content
"""

import logging
from typing import Optional

import httpx

from .base import ModelBackend
from .types import ModelRequest, ModelResponse

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


def _extract_text(data: dict) -> Optional[str]:
    """
    Join the text parts of the first candidate.

    Returns None when the response carries no candidates (e.g. the prompt
    was blocked) or the candidate has no text parts.
    """
    candidates = data.get("candidates") or []
    if not candidates:
        return None

    parts = (candidates[0].get("content") or {}).get("parts") or []
    texts = [part["text"] for part in parts if isinstance(part, dict) and "text" in part]
    if not texts:
        return None
    return "".join(texts)


class GeminiModelBackend(ModelBackend):
    """
    Gemini text-completion backend.

    Sends the templated prompt as a single user turn and returns the first
    candidate's text. Every failure is reported as a ModelResponse status.
    """

    name = "gemini"

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-1.5-flash",
        base_url: str = DEFAULT_GEMINI_BASE_URL,
    ):
        self.api_key = api_key
        self.model_name = model_name
        self.base_url = base_url.rstrip("/")

    def generate(self, request: ModelRequest) -> ModelResponse:
        base_metadata = {
            "backend": "gemini",
            "model": self.model_name,
            "trace_id": request.trace_id,
        }

        if not self.api_key:
            return ModelResponse(
                status="fatal_error",
                error_type="backend_unavailable",
                metadata={**base_metadata, "error": "GEMINI_API_KEY not configured"},
            )

        endpoint = f"{self.base_url}/models/{self.model_name}:generateContent"
        payload = {"contents": [{"role": "user", "parts": [{"text": request.prompt}]}]}

        try:
            response = httpx.post(
                endpoint,
                params={"key": self.api_key},
                json=payload,
                timeout=request.timeout_s,
            )
        except httpx.TimeoutException:
            return ModelResponse(
                status="recoverable_error",
                error_type="timeout",
                metadata=base_metadata,
            )
        except httpx.RequestError as e:
            logger.error(f"Gemini request failed: {e}")
            return ModelResponse(
                status="fatal_error",
                error_type="backend_unavailable",
                metadata={**base_metadata, "error": str(e)},
            )

        if response.status_code != 200:
            logger.error(
                f"Gemini API error: {response.status_code}",
                extra={"status_code": response.status_code, "error_body": response.text[:500]},
            )
            return ModelResponse(
                status="fatal_error",
                error_type="backend_unavailable",
                metadata={**base_metadata, "status_code": response.status_code},
            )

        try:
            text = _extract_text(response.json())
        except ValueError as e:
            return ModelResponse(
                status="recoverable_error",
                error_type="invalid_output",
                metadata={**base_metadata, "error": str(e)},
            )

        if text is None:
            return ModelResponse(
                status="recoverable_error",
                error_type="invalid_output",
                metadata=base_metadata,
            )

        return ModelResponse(status="success", output=text, metadata=base_metadata)
