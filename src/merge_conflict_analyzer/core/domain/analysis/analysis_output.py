from pydantic import BaseModel, ConfigDict, Field

from merge_conflict_analyzer.core.domain.analysis.interference_event import InterferenceEvent

ANALYSIS_DATA_VERSION = 1


class ModifiedLinesRecord(BaseModel):
    """Line numbers touched by each branch in one class of the merge."""

    model_config = ConfigDict(populate_by_name=True)

    file: str
    class_name: str = Field(default="", alias="className")
    left_added: list[int] = Field(default_factory=list, alias="leftAdded")
    left_removed: list[int] = Field(default_factory=list, alias="leftRemoved")
    right_added: list[int] = Field(default_factory=list, alias="rightAdded")
    right_removed: list[int] = Field(default_factory=list, alias="rightRemoved")


class MissingFileRecord(BaseModel):
    """Full content of a file the analysis reasoned about but the diff omits."""

    file: str
    content: str


class AnalysisData(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    version: int = ANALYSIS_DATA_VERSION
    modified_lines: list[ModifiedLinesRecord] = Field(default_factory=list, alias="modifiedLines")
    missing_files: list[MissingFileRecord] = Field(default_factory=list, alias="missingFiles")


class AnalysisOutput(BaseModel):
    """Terminal, delivery-ready record of one analysis run."""

    model_config = ConfigDict(frozen=True)

    uuid: str
    repository: str
    owner: str
    pull_number: int
    diff: str
    events: list[InterferenceEvent] = Field(default_factory=list)
    data: AnalysisData = Field(default_factory=AnalysisData)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
