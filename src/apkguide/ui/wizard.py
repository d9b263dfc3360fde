"""Interactive terminal wizard.

The wizard drives a GenerationController through one or more guides:

1. Choose the operating system.
2. Enter the repository URL and pick the target Android version.
3. Watch the status phases while the guide is generated.
4. Page through the steps, copying commands and opening links.
5. Start over (reset) or quit.
"""

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import typer
from rich.live import Live
from simple_term_menu import TerminalMenu

from ..constants import ANDROID_VERSIONS
from ..core.lifecycle import ControllerSnapshot, GenerationController, LifecycleState
from ..models import Action, ActionKind, FlatStep, OperatingSystem, OsBranchingStep
from ..output import OutputContext
from ..services.actions import CopyFeedback, activate_action, copy_to_clipboard
from .navigator import StepNavigator, SubStageNavigator, leftover_groups, uses_sub_stages
from .render import render_status, render_step

Chooser = Callable[[str, Sequence[str]], int | None]
Prompter = Callable[[str], str]


def choose(title: str, options: Sequence[str]) -> int | None:
    """Show a terminal menu; returns the selected index or None on escape."""
    menu = TerminalMenu(list(options), title=title, clear_screen=False, cycle_cursor=True)
    selection = menu.show()
    # show() returns int for single-select, None on escape/ctrl-c
    return selection if isinstance(selection, int) else None


def prompt_text(message: str) -> str:
    return typer.prompt(message, default="", show_default=False)


@dataclass
class MenuEntry:
    label: str
    run: Callable[[], bool | None]


class Wizard:
    """Interactive session over a GenerationController.

    ``chooser`` and ``prompter`` default to terminal menus and typer prompts;
    tests pass scripted replacements.
    """

    def __init__(
        self,
        controller: GenerationController,
        ctx: OutputContext,
        *,
        default_version: str = ANDROID_VERSIONS[0],
        feedback: CopyFeedback | None = None,
        chooser: Chooser = choose,
        prompter: Prompter = prompt_text,
    ) -> None:
        self.controller = controller
        self.ctx = ctx
        self.default_version = default_version
        self.feedback = feedback or CopyFeedback()
        self.chooser = chooser
        self.prompter = prompter

    def run(self) -> None:
        """Run guides until the user quits."""
        while True:
            operating_system = self._choose_os()
            if operating_system is None:
                return
            self.controller.select_operating_system(operating_system)

            snapshot = self._collect_and_generate()
            if snapshot is None:
                return

            if snapshot.state is LifecycleState.FAILED:
                self.ctx.error(snapshot.error or "Generation failed")
                restart = self.chooser("What now?", ["Start over", "Quit"]) == 0
            else:
                restart = self.browse(snapshot.steps, snapshot.operating_system)

            self.controller.reset()
            if not restart:
                return

    def _choose_os(self) -> OperatingSystem | None:
        systems = list(OperatingSystem)
        index = self.chooser(
            "First, choose your development environment",
            [os.display_name for os in systems],
        )
        return None if index is None else systems[index]

    def _choose_version(self) -> str | None:
        versions = list(ANDROID_VERSIONS)
        if self.default_version in versions:
            versions.remove(self.default_version)
        versions.insert(0, self.default_version)
        index = self.chooser("Target Android version", versions)
        return None if index is None else versions[index]

    def _collect_and_generate(self) -> ControllerSnapshot | None:
        """Ask for input until a generation finishes; None if the user quits."""
        while True:
            url = self.prompter("GitHub repository URL (blank to quit)")
            if not url.strip():
                return None
            version = self._choose_version()
            if version is None:
                return None

            snapshot = asyncio.run(self.generate(url, version))
            if snapshot.state is LifecycleState.INPUT_INVALID:
                self.ctx.error(snapshot.error or "Invalid input")
                continue
            return snapshot

    async def generate(self, url: str, version: str) -> ControllerSnapshot:
        """Submit and show the status phases until the request settles."""
        if not self.controller.submit(url, version):
            return self.controller.snapshot()
        if self.ctx.json_mode:
            return await self.controller.wait()

        with Live(
            render_status(self.controller.snapshot()),
            console=self.ctx.console,
            transient=True,
            refresh_per_second=8,
        ) as live:
            self.controller.listener = lambda snap: live.update(render_status(snap))
            try:
                return await self.controller.wait()
            finally:
                self.controller.listener = None

    def browse(
        self,
        steps: Sequence[FlatStep | OsBranchingStep],
        operating_system: OperatingSystem | None,
    ) -> bool:
        """Page through the guide. Returns True to start over, False to quit."""
        navigator = StepNavigator(steps, operating_system)
        stages: dict[int, SubStageNavigator] = {}

        while True:
            grouped = navigator.grouped_actions()
            step_stages = None
            if grouped and uses_sub_stages(grouped):
                step_stages = stages.setdefault(navigator.index, SubStageNavigator(grouped))

            self.ctx.print(render_step(navigator, self.feedback, step_stages))
            entries = self._menu_entries(navigator, step_stages)
            index = self.chooser(navigator.position, [entry.label for entry in entries])
            if index is None:
                return False
            outcome = entries[index].run()
            if outcome is not None:
                return outcome

    def _menu_entries(
        self, navigator: StepNavigator, stages: SubStageNavigator | None
    ) -> list[MenuEntry]:
        entries: list[MenuEntry] = []

        if navigator.is_last:
            entries.append(MenuEntry("Start over", lambda: True))
        else:
            entries.append(MenuEntry("Next", lambda: _advance(navigator.next)))
        if not navigator.is_first:
            entries.append(MenuEntry("Previous", lambda: _advance(navigator.previous)))

        command = navigator.command()
        if command:
            entries.append(MenuEntry("Copy command", lambda: self._copy(command)))

        if navigator.needs_os_choice:
            entries.append(MenuEntry("Choose operating system", lambda: self._pick_os(navigator)))

        if stages is not None:
            if not stages.is_last:
                entries.append(MenuEntry("Next sub-step", lambda: _advance(stages.next)))
            if not stages.is_first:
                entries.append(MenuEntry("Previous sub-step", lambda: _advance(stages.previous)))
            actions = [action for _, group in stages.actions_by_group() for action in group]
            actions += [
                action
                for items in leftover_groups(navigator.grouped_actions()).values()
                for action in items
            ]
        else:
            actions = [
                action for items in navigator.grouped_actions().values() for action in items
            ]

        for action in actions:
            entries.append(MenuEntry(_action_entry_label(action), self._activator(action)))

        entries.append(MenuEntry("Quit", lambda: False))
        return entries

    def _activator(self, action: Action) -> Callable[[], None]:
        def run() -> None:
            result = activate_action(action)
            if result.ok and action.kind is ActionKind.COMMAND:
                self.feedback.mark(action.value)
                self.ctx.success(result.message)
            elif result.ok:
                self.ctx.print(result.message)
            else:
                self.ctx.warning(result.message)

        return run

    def _copy(self, text: str) -> None:
        result = copy_to_clipboard(text)
        if result.ok:
            self.feedback.mark(text)
            self.ctx.success(result.message)
        else:
            self.ctx.warning(result.message)

    def _pick_os(self, navigator: StepNavigator) -> None:
        operating_system = self._choose_os()
        if operating_system is not None:
            navigator.operating_system = operating_system


def _advance(move: Callable[[], object]) -> None:
    move()


def _action_entry_label(action: Action) -> str:
    verb = "Open" if action.kind is ActionKind.LINK else "Copy"
    return f"{verb}: {action.label}"

