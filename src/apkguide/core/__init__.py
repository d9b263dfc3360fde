"""Core business logic for apkguide.

This package contains the domain logic separated from CLI concerns:
- grouping: Partitioning step actions into known groups
- details: Formatting outline-style details text into typed blocks
- prompt: Prompt text for the generation service
- lifecycle: State machine for one guide generation
"""

from .details import (
    DetailBlock,
    Header,
    LetteredItem,
    NumberedItem,
    Paragraph,
    format_details,
    normalize_details,
)
from .grouping import ActionGroup, group_actions, resolve_group
from .lifecycle import (
    ControllerSnapshot,
    GenerationController,
    LifecycleState,
    validate_repository_url,
)
from .prompt import build_prompt

__all__ = [
    "ActionGroup",
    "ControllerSnapshot",
    "DetailBlock",
    "GenerationController",
    "Header",
    "LetteredItem",
    "LifecycleState",
    "NumberedItem",
    "Paragraph",
    "build_prompt",
    "format_details",
    "group_actions",
    "normalize_details",
    "resolve_group",
    "validate_repository_url",
]
