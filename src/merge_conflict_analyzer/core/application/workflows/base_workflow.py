from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

T_Event = TypeVar("T_Event")


class BaseWorkflow(ABC, Generic[T_Event]):
    """Abstract base for all deterministic workflow pipelines."""

    @abstractmethod
    async def execute(self, event: T_Event) -> Any:
        """Run the full workflow pipeline for the given event."""
