"""Action model for interactive step affordances.

An action is a single button shown inside a step: it either copies a
command to the clipboard or opens a link in the browser.
"""

from enum import Enum
from typing import Self
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ActionKind(str, Enum):
    """Side effect performed when an action is activated."""

    COMMAND = "command"
    LINK = "link"


class Action(BaseModel):
    """A single user-triggerable directive.

    Attributes:
        label: Button text shown to the user.
        kind: Whether activating copies ``value`` or opens it as a URL.
        value: Clipboard text for commands, URL for links.
        group: Optional raw presentation tag used to cluster related actions.

    Example:
        >>> Action(label="Open .zshrc", type="command", value="nano ~/.zshrc", group="zshrc")
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    label: str = Field(min_length=1, description="Display text")
    kind: ActionKind = Field(alias="type", description="command or link")
    value: str = Field(min_length=1, description="Command text or URL")
    group: str | None = Field(default=None, description="Presentation group tag")

    @field_validator("label", "value")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("group")
    @classmethod
    def _blank_group_is_absent(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _link_value_is_url(self) -> Self:
        """Links must point at an absolute http(s) URL."""
        if self.kind is ActionKind.LINK:
            parsed = urlparse(self.value.strip())
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ValueError(f"link action value is not a URL: {self.value!r}")
        return self
