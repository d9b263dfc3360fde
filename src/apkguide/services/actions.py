"""Clipboard and browser side effects for step actions."""

import logging
import time
import webbrowser
from collections.abc import Callable
from dataclasses import dataclass, field

import pyperclip

from ..constants import COPIED_FEEDBACK_SECONDS
from ..models import Action, ActionKind

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Outcome of activating an action."""

    ok: bool
    message: str


def copy_to_clipboard(text: str) -> ActionResult:
    """Copy text to the system clipboard."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.warning(f"Clipboard unavailable: {e}")
        return ActionResult(ok=False, message="Clipboard not available. Copy the text manually.")
    return ActionResult(ok=True, message="Copied!")


def open_link(url: str) -> ActionResult:
    """Open a URL in a new browser tab."""
    if not webbrowser.open_new_tab(url):
        logger.warning(f"No browser available to open {url}")
        return ActionResult(ok=False, message=f"Open this link manually: {url}")
    return ActionResult(ok=True, message=f"Opened {url}")


def activate_action(action: Action) -> ActionResult:
    """Perform the side effect determined by the action's kind."""
    if action.kind is ActionKind.LINK:
        return open_link(action.value)
    return copy_to_clipboard(action.value)


@dataclass
class CopyFeedback:
    """Tracks the transient "Copied!" acknowledgment per copied item.

    An item stays acknowledged for ``duration`` seconds after it was
    copied.
    """

    duration: float = COPIED_FEEDBACK_SECONDS
    clock: Callable[[], float] = time.monotonic
    _copied_at: dict[str, float] = field(default_factory=dict)

    def mark(self, key: str) -> None:
        self._copied_at[key] = self.clock()

    def is_active(self, key: str) -> bool:
        copied_at = self._copied_at.get(key)
        if copied_at is None:
            return False
        if self.clock() - copied_at >= self.duration:
            del self._copied_at[key]
            return False
        return True

    def label(self, key: str, default: str) -> str:
        """Return "Copied!" while acknowledged, otherwise ``default``."""
        return "Copied!" if self.is_active(key) else default
