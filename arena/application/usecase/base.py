"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Base use case.

    A use case turns a pydantic request into calls on domain services and
    returns a pydantic response. Domain errors propagate to the caller, which
    decides how to render them (HTTP route, maintenance script).
    """

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        """Run the use case for one request."""
