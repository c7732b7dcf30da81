"""Interference events as emitted by the semantic merge-conflict analysis tool."""

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN_FILE = "UNKNOWN"


class InterferenceNodeKind(StrEnum):
    # Override-assignment analysis
    DECLARATION = "declaration"
    OVERRIDE = "override"
    # Data-flow style analyses
    SOURCE = "source"
    SINK = "sink"


class CodeLocation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file: str = ""
    class_name: str = Field(default="", alias="class")
    method: str = ""
    line: int = 0


class InterferenceNode(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    kind: str = Field(alias="type")
    branch: Literal["L", "R"]
    source_text: str = Field(default="", alias="text")
    location: CodeLocation
    stack_trace: list[CodeLocation] | None = Field(default=None, alias="stackTrace")


class InterferenceBody(BaseModel):
    description: str = ""
    interference: list[InterferenceNode]

    @field_validator("interference")
    @classmethod
    def require_nodes(cls, value: list[InterferenceNode]) -> list[InterferenceNode]:
        if not value:
            raise ValueError("An interference event needs at least one node.")
        return value


class InterferenceEvent(BaseModel):
    """One finding: an ordered chain of nodes from the left and right branches."""

    model_config = ConfigDict(populate_by_name=True)

    type: str
    label: str = ""
    body: InterferenceBody

    @property
    def description(self) -> str:
        return self.body.description

    @property
    def interference(self) -> list[InterferenceNode]:
        return self.body.interference

    @property
    def first_node(self) -> InterferenceNode:
        return self.body.interference[0]

    @property
    def last_node(self) -> InterferenceNode:
        return self.body.interference[-1]

    @property
    def endpoint_key(self) -> tuple[str, int, str, int]:
        """Identity used for deduplication: both endpoints' file and line."""
        first, last = self.first_node.location, self.last_node.location
        return first.file, first.line, last.file, last.line
