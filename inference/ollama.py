import requests
from .base import ModelBackend
from .types import ModelRequest, ModelResponse


class OllamaModelBackend(ModelBackend):
    """
    Ollama backend for local model inference.

    Uses /api/chat with the fully templated prompt as the single user
    message. The prompt template already carries persona and length
    guidance, so no separate system message is sent.
    """

    name = "ollama"

    def __init__(self, model_name: str, base_url: str = "http://localhost:11434"):
        """
        Initialize Ollama backend.

        Args:
            model_name: Name of the model (e.g. "phi3:mini", "llama3")
            base_url:   Base URL of the Ollama service
        """
        self.model_name = model_name
        self.base_url = base_url

    def generate(self, request: ModelRequest) -> ModelResponse:
        """
        Generate a response using Ollama /api/chat.

        Args:
            request: ModelRequest with prompt and timeout

        Returns:
            ModelResponse with the model's text, or an error status
        """
        base_metadata = {
            "backend": "ollama",
            "model": self.model_name,
            "trace_id": request.trace_id,
        }

        try:
            payload = {
                "model": self.model_name,
                "messages": [{"role": "user", "content": request.prompt}],
                "stream": False,
            }

            resp = requests.post(
                f"{self.base_url}/api/chat",
                json=payload,
                timeout=request.timeout_s,
            )

            resp.raise_for_status()
            data = resp.json()
            output: str = data.get("message", {}).get("content", "")

            return ModelResponse(
                status="success",
                output=output,
                metadata=base_metadata,
            )

        except requests.Timeout:
            return ModelResponse(
                status="recoverable_error",
                error_type="timeout",
                metadata=base_metadata,
            )

        except ValueError as e:
            # Body was not JSON
            return ModelResponse(
                status="recoverable_error",
                error_type="invalid_output",
                metadata={**base_metadata, "error": str(e)},
            )

        except Exception as e:
            return ModelResponse(
                status="fatal_error",
                error_type="backend_unavailable",
                metadata={**base_metadata, "error": str(e)},
            )
