"""Paging through generated steps."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ..core.details import DetailBlock, format_details
from ..core.grouping import ActionGroup, group_actions
from ..models import Action, FlatStep, OperatingSystem, OsBranchingStep, StepContent


@dataclass(frozen=True)
class SubStageSpec:
    title: str
    description: str
    groups: tuple[ActionGroup, ...]


class SubStage(Enum):
    """Stages of the macOS/Linux environment setup pipeline."""

    SHELL_CHECK = SubStageSpec(
        "Identify your shell",
        "Run this command to find out which option (A or B) to use in the next stages.",
        (ActionGroup.SHELL_CHECK,),
    )
    SETUP_FILES = SubStageSpec(
        "Create and open the file",
        'First use "Create file" to make sure it exists, then "Open file" to edit it.',
        (ActionGroup.ZSHRC_SETUP, ActionGroup.BASH_SETUP),
    )
    COPY_BLOCK = SubStageSpec(
        "Copy the configuration block",
        "Paste this block at the end of the file you opened. "
        "Remember to replace 'YOUR_ANDROID_SDK_PATH'.",
        (ActionGroup.COMMON,),
    )
    APPLY_CHANGES = SubStageSpec(
        "Apply the changes",
        "Save and close the file, then use the button for your shell "
        "so the terminal picks up the changes.",
        (ActionGroup.ZSHRC_APPLY, ActionGroup.BASH_APPLY),
    )
    VALIDATE = SubStageSpec(
        "Validate the configuration",
        "Use these buttons to confirm everything works. "
        "If you get an error, check the details section below.",
        (ActionGroup.VALIDATION,),
    )

    @property
    def spec(self) -> SubStageSpec:
        return self.value


SUB_STAGES = tuple(SubStage)
_PIPELINE_GROUPS = frozenset(group for stage in SUB_STAGES for group in stage.spec.groups)


def uses_sub_stages(grouped: dict[ActionGroup, list[Action]]) -> bool:
    """True when the actions follow the setup pipeline rather than free groups."""
    return any(group in _PIPELINE_GROUPS for group in grouped)


def leftover_groups(grouped: dict[ActionGroup, list[Action]]) -> dict[ActionGroup, list[Action]]:
    """Groups that no setup stage shows, in their original order."""
    return {group: items for group, items in grouped.items() if group not in _PIPELINE_GROUPS}


class SubStageNavigator:
    """Pages through the setup pipeline of a single step."""

    def __init__(self, grouped: dict[ActionGroup, list[Action]]) -> None:
        self.grouped = grouped
        self.index = 0

    @property
    def current(self) -> SubStage:
        return SUB_STAGES[self.index]

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_last(self) -> bool:
        return self.index == len(SUB_STAGES) - 1

    def next(self) -> SubStage:
        if not self.is_last:
            self.index += 1
        return self.current

    def previous(self) -> SubStage:
        if not self.is_first:
            self.index -= 1
        return self.current

    def actions_by_group(self) -> list[tuple[ActionGroup, list[Action]]]:
        """Actions of the current stage, one entry per stage group."""
        return [(group, self.grouped.get(group, [])) for group in self.current.spec.groups]


class StepNavigator:
    """Paginates a generated guide and resolves each step's active content.

    Args:
        steps: Steps in guide order (must not be empty)
        operating_system: OS used to pick branches of OS-specific steps
    """

    def __init__(
        self,
        steps: Sequence[FlatStep | OsBranchingStep],
        operating_system: OperatingSystem | None = None,
    ) -> None:
        if not steps:
            raise ValueError("StepNavigator needs at least one step")
        self.steps = tuple(steps)
        self.operating_system = operating_system
        self.index = 0

    def __len__(self) -> int:
        return len(self.steps)

    @property
    def current(self) -> FlatStep | OsBranchingStep:
        return self.steps[self.index]

    @property
    def position(self) -> str:
        return f"Step {self.index + 1} of {len(self.steps)}"

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def is_last(self) -> bool:
        return self.index == len(self.steps) - 1

    def next(self) -> FlatStep | OsBranchingStep:
        if not self.is_last:
            self.index += 1
        return self.current

    def previous(self) -> FlatStep | OsBranchingStep:
        if not self.is_first:
            self.index -= 1
        return self.current

    @property
    def needs_os_choice(self) -> bool:
        return isinstance(self.current, OsBranchingStep) and self.operating_system is None

    def content(self) -> StepContent:
        """Content of the current step for the selected operating system."""
        return self.current.content_for(self.operating_system)

    def command(self) -> str | None:
        step = self.current
        return step.command if isinstance(step, FlatStep) else None

    def grouped_actions(self) -> dict[ActionGroup, list[Action]]:
        return group_actions(self.content().actions)

    def detail_blocks(self) -> list[DetailBlock]:
        return list(format_details(self.content().details))
