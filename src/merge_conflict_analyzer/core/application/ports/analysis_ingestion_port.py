from abc import ABC, abstractmethod

from merge_conflict_analyzer.core.domain.analysis import AnalysisOutput


class AnalysisIngestionPort(ABC):

    @abstractmethod
    async def send_analysis(self, output: AnalysisOutput) -> None:
        """Hands a finished analysis to the ingestion service."""
