"""Generation request model."""

from pydantic import BaseModel, ConfigDict, Field

from .step import OperatingSystem


class GenerationRequest(BaseModel):
    """Inputs for one guide generation.

    Constructed once per user submission and discarded after the call
    resolves.
    """

    model_config = ConfigDict(frozen=True)

    repository_url: str = Field(description="Repository locator (GitHub URL)")
    platform_version: str = Field(description="Target Android version label")
    operating_system: OperatingSystem | None = Field(
        default=None, description="Upfront OS choice, if the user made one"
    )
