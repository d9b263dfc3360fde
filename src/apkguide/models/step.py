"""Step models for generated guide pages.

A step is one page of the guide. It comes in two shapes:

- ``FlatStep``: a single explanation with an optional command, details and
  actions shared by every operating system.
- ``OsBranchingStep``: a title and explanation plus one content block per
  operating system, chosen at render time.

The wire format marks the second shape with ``"isOsSpecific": true``; the
``Step`` union uses that flag as its discriminator so exactly one
representation is ever active for a step.
"""

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    field_validator,
)

from .action import Action


class OperatingSystem(str, Enum):
    """Operating systems the guide can branch on."""

    MACOS_LINUX = "macos_linux"
    WINDOWS = "windows"

    @property
    def display_name(self) -> str:
        return _OS_DISPLAY_NAMES[self]


_OS_DISPLAY_NAMES = {
    OperatingSystem.MACOS_LINUX: "macOS / Linux",
    OperatingSystem.WINDOWS: "Windows",
}


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


class StepContent(BaseModel):
    """Explanation, details and actions shown for one step (or one OS branch)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    explanation: str = ""
    details: str | None = None
    actions: list[Action] = Field(default_factory=list)

    @field_validator("actions", mode="before")
    @classmethod
    def _none_actions(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("explanation", mode="before")
    @classmethod
    def _none_explanation(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("details")
    @classmethod
    def _blank_details(cls, value: str | None) -> str | None:
        return _blank_to_none(value)


class FlatStep(BaseModel):
    """Step whose content is the same for every operating system.

    Attributes:
        title: Short page label.
        explanation: Guidance text; embedded newlines are line breaks.
        command: Single terminal command, or None when absent.
        details: Semi-structured outline text, or None when absent.
        actions: Ordered interactive actions (display order).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_os_specific: Literal[False] = Field(default=False, alias="isOsSpecific")
    title: str = ""
    explanation: str = ""
    command: str | None = None
    details: str | None = None
    actions: list[Action] = Field(default_factory=list)

    @field_validator("is_os_specific", mode="before")
    @classmethod
    def _none_flag(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("actions", mode="before")
    @classmethod
    def _none_actions(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("title", "explanation", mode="before")
    @classmethod
    def _none_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("command", "details")
    @classmethod
    def _blank_optional(cls, value: str | None) -> str | None:
        return _blank_to_none(value)

    def content_for(self, operating_system: OperatingSystem | None = None) -> StepContent:
        """Return the step content; the OS choice does not matter for flat steps."""
        return StepContent(
            explanation=self.explanation, details=self.details, actions=self.actions
        )


class OsBranchingStep(BaseModel):
    """Step whose content is selected by the user's operating system.

    Attributes:
        title: Short page label.
        explanation: Text shown before an OS is chosen (e.g. "Select your OS").
        os_instructions: Content per operating system.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_os_specific: Literal[True] = Field(default=True, alias="isOsSpecific")
    title: str = ""
    explanation: str = ""
    os_instructions: dict[OperatingSystem, StepContent] = Field(
        default_factory=dict, alias="osInstructions"
    )

    @field_validator("title", "explanation", mode="before")
    @classmethod
    def _none_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("os_instructions", mode="before")
    @classmethod
    def _none_instructions(cls, value: Any) -> Any:
        return {} if value is None else value

    def content_for(self, operating_system: OperatingSystem | None) -> StepContent:
        """Return the content for one OS, or empty content when that branch is missing.

        Before an OS is chosen only the step explanation is shown.
        """
        if operating_system is None:
            return StepContent(explanation=self.explanation)
        return self.os_instructions.get(operating_system, StepContent())


def _step_tag(value: Any) -> str:
    if isinstance(value, dict):
        flag = value.get("isOsSpecific", value.get("is_os_specific"))
        return "os" if flag is True else "flat"
    return "os" if isinstance(value, OsBranchingStep) else "flat"


Step = Annotated[
    Annotated[FlatStep, Tag("flat")] | Annotated[OsBranchingStep, Tag("os")],
    Discriminator(_step_tag),
]

_STEP_LIST = TypeAdapter(list[Step])


def parse_steps(payload: Any) -> list[FlatStep | OsBranchingStep]:
    """Validate a decoded JSON value into an ordered list of steps.

    Raises:
        pydantic.ValidationError: If the payload is not a list of step records.
    """
    return _STEP_LIST.validate_python(payload)


def dump_steps(steps: list[FlatStep | OsBranchingStep]) -> list[dict[str, Any]]:
    """Serialize steps back to their wire shape."""
    return [step.model_dump(by_alias=True, exclude_none=True, mode="json") for step in steps]
