from abc import ABC, abstractmethod
from .types import ModelRequest, ModelResponse


class ModelBackend(ABC):
    """
    Text-completion boundary for the answer oracle.

    generate() returns a ModelResponse for every outcome, failures included.
    It must not raise; AnswerOracle treats an exception as a broken backend.
    """

    name: str = "unknown"

    @abstractmethod
    def generate(self, request: ModelRequest) -> ModelResponse:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
