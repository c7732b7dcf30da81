from abc import ABC, abstractmethod

from merge_conflict_analyzer.core.domain.merge import PrSettings


class SettingsPort(ABC):

    @abstractmethod
    async def get_settings(self, owner: str, repo: str, pull_number: int) -> PrSettings | None:
        """Returns the PR's analysis entry point, or None when none is configured."""
