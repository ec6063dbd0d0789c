from dataclasses import dataclass
from typing import Optional, Dict, Any, Literal

ModelStatus = Literal["success", "recoverable_error", "fatal_error"]
ModelErrorType = Literal["timeout", "invalid_output", "backend_unavailable"]


@dataclass
class ModelRequest:
    """One prompt for one completion. trace_id ties log lines together."""

    task: str                  # "answer" for the helpline oracle
    prompt: str
    timeout_s: Optional[float] = 30
    trace_id: Optional[str] = None


@dataclass
class ModelResponse:
    status: ModelStatus
    output: Optional[str] = None
    error_type: Optional[ModelErrorType] = None
    metadata: Optional[Dict[str, Any]] = None

    @property
    def succeeded(self) -> bool:
        return self.status == "success"

    @property
    def has_text(self) -> bool:
        return bool(self.output and self.output.strip())

    @property
    def failure_kind(self) -> str:
        """error_type, or backend_unavailable when a backend left it unset."""
        return self.error_type or "backend_unavailable"
