"""Action grouping for structured step rendering.

The generator tags actions with free-form group strings. Known tags are
mapped onto ``ActionGroup`` so the presentation layer can match on them
exhaustively; anything else falls back to ``ActionGroup.DEFAULT``.
"""

from collections.abc import Iterable
from enum import Enum

from ..models import Action


class ActionGroup(str, Enum):
    """Known action group keys."""

    # macOS/Linux environment setup pipeline
    SHELL_CHECK = "shell_check"
    ZSHRC_SETUP = "zshrc_setup"
    BASH_SETUP = "bash_setup"
    COMMON = "common"
    ZSHRC_APPLY = "zshrc_apply"
    BASH_APPLY = "bash_apply"
    VALIDATION = "validation"

    # Two-column shell choice layout
    ZSHRC = "zshrc"
    BASH_PROFILE = "bash_profile"

    DEFAULT = "default"


_BY_VALUE = {group.value: group for group in ActionGroup}


def resolve_group(raw: str | None) -> ActionGroup:
    """Map a raw group tag to a known group, falling back to DEFAULT."""
    if raw is None:
        return ActionGroup.DEFAULT
    return _BY_VALUE.get(raw.strip().lower(), ActionGroup.DEFAULT)


def group_actions(actions: Iterable[Action]) -> dict[ActionGroup, list[Action]]:
    """Partition actions by group, preserving input order within each group.

    Keys appear in the order their first action appears.

    Args:
        actions: Actions in display order.

    Returns:
        Mapping of group to actions; empty when ``actions`` is empty.
    """
    grouped: dict[ActionGroup, list[Action]] = {}
    for action in actions:
        grouped.setdefault(resolve_group(action.group), []).append(action)
    return grouped
