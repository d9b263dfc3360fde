"""External service integrations for apkguide.

This package provides interfaces to external tools and services:
- gemini: Gemini text generation for guide steps
- actions: Clipboard and browser side effects of step actions
"""

from .actions import ActionResult, CopyFeedback, activate_action, copy_to_clipboard, open_link
from .gemini import (
    RESPONSE_SCHEMA,
    GenerationClient,
    create_generation_client,
    parse_response_text,
)

__all__ = [
    "RESPONSE_SCHEMA",
    "ActionResult",
    "CopyFeedback",
    "GenerationClient",
    "activate_action",
    "copy_to_clipboard",
    "create_generation_client",
    "open_link",
    "parse_response_text",
]
