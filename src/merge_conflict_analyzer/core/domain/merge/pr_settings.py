from pydantic import BaseModel, ConfigDict, Field


class PrSettings(BaseModel):
    """Per-PR analysis entry point, as stored by the settings service."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    main_class: str = Field(alias="mainClass")
    main_method: str = Field(alias="mainMethod")
    base_class: str | None = Field(default=None, alias="baseClass")

    uuid: str | None = None
    repository: str | None = None
    owner: str | None = None
    pull_number: int | None = None
