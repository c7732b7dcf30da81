from abc import ABC, abstractmethod


class RepositoryRegistryPort(ABC):

    @abstractmethod
    async def is_registered(self, owner: str, repo: str) -> bool:
        """True when the repository is enrolled for analysis."""

    @abstractmethod
    async def register(self, owner: str, repo: str) -> bool:
        """Enrolls the repository. Returns True on success."""
