"""Tests for clipboard and browser actions."""

from unittest.mock import patch

import pyperclip
import pytest

from apkguide.models import Action
from apkguide.services.actions import (
    CopyFeedback,
    activate_action,
    copy_to_clipboard,
    open_link,
)


@pytest.mark.unit
class TestCopyToClipboard:
    def test_copies_text(self) -> None:
        with patch("apkguide.services.actions.pyperclip.copy") as copy:
            result = copy_to_clipboard("echo hi")
        copy.assert_called_once_with("echo hi")
        assert result.ok
        assert result.message == "Copied!"

    def test_clipboard_unavailable(self) -> None:
        with patch(
            "apkguide.services.actions.pyperclip.copy",
            side_effect=pyperclip.PyperclipException("no clipboard"),
        ):
            result = copy_to_clipboard("echo hi")
        assert not result.ok
        assert "manually" in result.message


@pytest.mark.unit
class TestOpenLink:
    def test_opens_new_tab(self) -> None:
        with patch("apkguide.services.actions.webbrowser.open_new_tab", return_value=True) as op:
            result = open_link("https://nodejs.org/")
        op.assert_called_once_with("https://nodejs.org/")
        assert result.ok

    def test_no_browser(self) -> None:
        with patch("apkguide.services.actions.webbrowser.open_new_tab", return_value=False):
            result = open_link("https://nodejs.org/")
        assert not result.ok
        assert "https://nodejs.org/" in result.message


@pytest.mark.unit
class TestActivateAction:
    def test_link_opens_browser(self) -> None:
        action = Action.model_validate(
            {"label": "Node", "type": "link", "value": "https://nodejs.org/"}
        )
        with (
            patch("apkguide.services.actions.webbrowser.open_new_tab", return_value=True) as op,
            patch("apkguide.services.actions.pyperclip.copy") as copy,
        ):
            activate_action(action)
        op.assert_called_once_with("https://nodejs.org/")
        copy.assert_not_called()

    def test_command_copies(self) -> None:
        action = Action.model_validate({"label": "Ls", "type": "command", "value": "ls -la"})
        with (
            patch("apkguide.services.actions.webbrowser.open_new_tab") as op,
            patch("apkguide.services.actions.pyperclip.copy") as copy,
        ):
            activate_action(action)
        copy.assert_called_once_with("ls -la")
        op.assert_not_called()


@pytest.mark.unit
class TestCopyFeedback:
    """Tests for the transient copied acknowledgment."""

    def test_expires_after_duration(self) -> None:
        now = [100.0]
        feedback = CopyFeedback(duration=2.0, clock=lambda: now[0])
        feedback.mark("cmd")

        now[0] = 101.9
        assert feedback.is_active("cmd")
        assert feedback.label("cmd", "Copy") == "Copied!"

        now[0] = 102.0
        assert not feedback.is_active("cmd")
        assert feedback.label("cmd", "Copy") == "Copy"

    def test_tracks_items_independently(self) -> None:
        now = [0.0]
        feedback = CopyFeedback(duration=2.0, clock=lambda: now[0])
        feedback.mark("a")
        now[0] = 1.5
        feedback.mark("b")
        now[0] = 2.5
        assert not feedback.is_active("a")
        assert feedback.is_active("b")

    def test_unknown_item_inactive(self) -> None:
        assert not CopyFeedback().is_active("never")
