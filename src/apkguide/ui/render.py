"""Rich renderables for the guide."""

from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.padding import Padding
from rich.panel import Panel
from rich.rule import Rule
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from ..core.details import DetailBlock, Header, LetteredItem, NumberedItem, Paragraph
from ..core.grouping import ActionGroup
from ..core.lifecycle import ControllerSnapshot
from ..models import Action, ActionKind
from ..services.actions import CopyFeedback
from .navigator import (
    SUB_STAGES,
    StepNavigator,
    SubStageNavigator,
    leftover_groups,
    uses_sub_stages,
)

_SHELL_HEADINGS = {
    ActionGroup.ZSHRC: "Option A: ZSH (modern macOS)",
    ActionGroup.BASH_PROFILE: "Option B: Bash (older macOS / Linux)",
}


def render_status(snapshot: ControllerSnapshot) -> Panel:
    """Checklist of status phases: done, current, pending."""
    lines = Text()
    for index, message in enumerate(snapshot.status_messages):
        if index < snapshot.phase:
            lines.append("✓ ", style="green")
            lines.append(message, style="dim strike")
        elif index == snapshot.phase:
            lines.append("● ", style="cyan blink")
            lines.append(message, style="bold")
        else:
            lines.append("○ ", style="dim")
            lines.append(message, style="dim")
        lines.append("\n")
    return Panel(lines, title="Processing request...", border_style="cyan")


def render_details(blocks: list[DetailBlock]) -> RenderableType | None:
    """Render formatted detail blocks; None when there is nothing to show."""
    if not blocks:
        return None
    parts: list[RenderableType] = []
    for block in blocks:
        match block:
            case Header(text=text):
                parts.append(Rule(Text(text, style="bold"), align="left", style="grey50"))
            case LetteredItem(letter=letter, text=text):
                parts.append(Padding(Text.assemble((f"{letter}. ", "bold"), text), (0, 0, 0, 6)))
            case NumberedItem(number=number, text=text):
                parts.append(
                    Padding(Text.assemble((f"{number}. ", "bold"), (text, "bold")), (0, 0, 0, 2))
                )
            case Paragraph(text=text):
                parts.append(Text(text, style="grey70"))
    return Panel(Group(*parts), title="Details", border_style="grey50")


def action_label(action: Action, feedback: CopyFeedback | None = None) -> Text:
    """Button-like label: link or clipboard marker plus text."""
    if action.kind is ActionKind.LINK:
        return Text.assemble(("🔗 ", ""), (action.label, "cyan underline"))
    label = feedback.label(action.value, action.label) if feedback else action.label
    style = "bold green" if feedback and feedback.is_active(action.value) else "cyan"
    return Text.assemble(("📋 ", ""), (label, style))


def _action_list(actions: list[Action], feedback: CopyFeedback | None) -> Group:
    return Group(*(action_label(action, feedback) for action in actions))


def _shell_columns(
    zsh: list[Action], bash: list[Action], feedback: CopyFeedback | None
) -> Columns:
    return Columns(
        [
            Panel(_action_list(zsh, feedback), title=_SHELL_HEADINGS[ActionGroup.ZSHRC]),
            Panel(_action_list(bash, feedback), title=_SHELL_HEADINGS[ActionGroup.BASH_PROFILE]),
        ],
        expand=True,
    )


def render_sub_stage(
    stages: SubStageNavigator, feedback: CopyFeedback | None = None
) -> RenderableType:
    """Stepper header and the actions of the active setup stage."""
    stepper = Text()
    for index, stage in enumerate(SUB_STAGES):
        if index < stages.index:
            stepper.append(f" ✓ {stage.spec.title} ", style="green")
        elif index == stages.index:
            stepper.append(f" {index + 1}. {stage.spec.title} ", style="bold reverse cyan")
        else:
            stepper.append(f" {index + 1}. {stage.spec.title} ", style="dim")
        if index < len(SUB_STAGES) - 1:
            stepper.append("─", style="dim")

    spec = stages.current.spec
    groups = stages.actions_by_group()
    if len(groups) > 1:
        body: RenderableType = _shell_columns(groups[0][1], groups[1][1], feedback)
    else:
        body = _action_list(groups[0][1], feedback)

    return Group(
        stepper,
        Panel(
            Group(Text(spec.description, style="grey70"), body),
            title=f"Sub-step {stages.index + 1}: {spec.title}",
        ),
    )


def render_actions(
    grouped: dict[ActionGroup, list[Action]], feedback: CopyFeedback | None = None
) -> RenderableType | None:
    """Free-form layout: every group as a list, a zshrc/bash_profile pair as columns."""
    if not grouped:
        return None
    parts: list[RenderableType] = []
    paired = ActionGroup.ZSHRC in grouped and ActionGroup.BASH_PROFILE in grouped
    if paired:
        parts.append(Text("Choose your shell and edit the file", style="bold"))
        parts.append(
            _shell_columns(
                grouped[ActionGroup.ZSHRC], grouped[ActionGroup.BASH_PROFILE], feedback
            )
        )
    for group, actions in grouped.items():
        if paired and group in _SHELL_HEADINGS:
            continue
        heading = _SHELL_HEADINGS.get(group)
        if heading:
            parts.append(Text(heading, style="bold"))
        parts.append(_action_list(actions, feedback))
    return Group(*parts)


def render_command(command: str, copied: bool = False) -> Panel:
    subtitle = "[green]Copied![/green]" if copied else "[dim]Copy command[/dim] in the menu"
    return Panel(
        Syntax(command, "bash", theme="monokai", word_wrap=True),
        subtitle=subtitle,
        border_style="yellow",
    )


def render_step(
    navigator: StepNavigator,
    feedback: CopyFeedback | None = None,
    stages: SubStageNavigator | None = None,
) -> Panel:
    """Full page for the navigator's current step."""
    content = navigator.content()
    parts: list[RenderableType] = []

    if content.explanation:
        parts.append(Text(content.explanation))
    if navigator.needs_os_choice:
        parts.append(Text("Choose your operating system to see these instructions.", "yellow"))

    command = navigator.command()
    if command:
        copied = feedback.is_active(command) if feedback else False
        parts.append(render_command(command, copied=copied))

    grouped = navigator.grouped_actions()
    if grouped and uses_sub_stages(grouped):
        parts.append(render_sub_stage(stages or SubStageNavigator(grouped), feedback))
        grouped = leftover_groups(grouped)
    actions = render_actions(grouped, feedback)
    if actions is not None:
        parts.append(actions)

    details = render_details(navigator.detail_blocks())
    if details is not None:
        parts.append(details)

    title = Text(navigator.current.title or "Untitled step", style="bold cyan")
    return Panel(Group(*parts), title=title, subtitle=navigator.position, padding=(1, 2))


def render_summary(navigator: StepNavigator) -> Table:
    """One-line-per-step overview of the guide."""
    table = Table(title="Your interactive guide", show_lines=False)
    table.add_column("#", justify="right", style="bold")
    table.add_column("Step")
    table.add_column("Command", style="yellow")
    for index, step in enumerate(navigator.steps, start=1):
        command = getattr(step, "command", None) or ""
        table.add_row(str(index), step.title, command.splitlines()[0] if command else "")
    return table
