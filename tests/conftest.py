"""Shared test fixtures for apkguide tests."""

import copy
import json
from pathlib import Path
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest
from typer.testing import CliRunner

from apkguide.models import GenerationRequest, OperatingSystem
from apkguide.services.gemini import GenerationClient

SAMPLE_STEPS: list[dict[str, Any]] = [
    {
        "title": "Step 1: Basic tools",
        "explanation": "Install Node.js and Cordova.",
        "command": "npm install -g cordova",
        "details": "--- Why ---\n1. Cordova needs Node.js. a. Use the LTS build.",
        "actions": [
            {"label": "Download Node.js", "type": "link", "value": "https://nodejs.org/"},
        ],
        "isOsSpecific": False,
    },
    {
        "title": "Step 3: Environment setup",
        "explanation": "Select your operating system.",
        "isOsSpecific": True,
        "osInstructions": {
            "macos_linux": {
                "explanation": "Configure your shell profile.",
                "details": "--- Finding the SDK ---\n1. Open Android Studio.",
                "actions": [
                    {
                        "label": "Check shell",
                        "type": "command",
                        "value": "echo $SHELL",
                        "group": "shell_check",
                    },
                    {
                        "label": "Create .zshrc",
                        "type": "command",
                        "value": "touch ~/.zshrc",
                        "group": "zshrc_setup",
                    },
                    {
                        "label": "Create .bash_profile",
                        "type": "command",
                        "value": "touch ~/.bash_profile",
                        "group": "bash_setup",
                    },
                    {
                        "label": "Copy block",
                        "type": "command",
                        "value": "export ANDROID_HOME=YOUR_ANDROID_SDK_PATH",
                        "group": "common",
                    },
                    {
                        "label": "Check adb",
                        "type": "command",
                        "value": "adb --version",
                        "group": "validation",
                    },
                ],
            },
            "windows": {
                "explanation": "Use the system settings.",
                "details": "1. Open Settings. a. Search for environment variables.",
                "actions": [],
            },
        },
    },
    {
        "title": "Step 8: Build",
        "explanation": "Build the APK.",
        "command": "cordova build android",
        "details": "",
        "actions": [],
        "isOsSpecific": False,
    },
]


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def sample_steps() -> list[dict[str, Any]]:
    """Decoded service response covering flat and OS-specific steps."""
    return copy.deepcopy(SAMPLE_STEPS)


@pytest.fixture
def sample_steps_json() -> str:
    """Well-formed service response text."""
    return json.dumps(SAMPLE_STEPS)


@pytest.fixture
def request_model() -> GenerationRequest:
    return GenerationRequest(
        repository_url="https://github.com/example/site",
        platform_version="Android 14 (Upside Down Cake)",
        operating_system=OperatingSystem.MACOS_LINUX,
    )


@pytest.fixture
def fake_genai() -> MagicMock:
    """Stand-in for ``genai.Client`` whose response text tests can set.

    ``fake_genai.models.generate_content`` returns an object with a
    ``text`` attribute holding an empty guide by default.
    """
    client = MagicMock()
    client.models.generate_content.return_value = SimpleNamespace(text="[]")
    return client


@pytest.fixture
def generation_client(fake_genai: MagicMock) -> GenerationClient:
    return GenerationClient(fake_genai, model="test-model")


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point apkguide at a temp config with instant status phases and a fake key.

    Returns the config file path.
    """
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        '[gemini]\nmodel = "test-model"\napi_key_env = "GEMINI_API_KEY"\n\n'
        "[wizard]\nstatus_interval = 0.0\ncopied_feedback_seconds = 2.0\n"
    )
    monkeypatch.setenv("APKGUIDE_CONFIG", str(config_path))
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.delenv("API_KEY", raising=False)
    return config_path
