"""Gemini integration for guide generation."""

import asyncio
import json
import logging
from typing import Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import ValidationError

from ..config import ApkGuideConfig
from ..core.prompt import build_prompt
from ..errors import (
    EmptyResponseError,
    MalformedResponseError,
    ServiceFailureError,
)
from ..models import FlatStep, GenerationRequest, OsBranchingStep, parse_steps

logger = logging.getLogger(__name__)


def _action_schema() -> types.Schema:
    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            "label": types.Schema(type=types.Type.STRING, description="Button text"),
            "type": types.Schema(
                type=types.Type.STRING,
                enum=["command", "link"],
                description="'command' copies to the clipboard, 'link' opens a URL",
            ),
            "value": types.Schema(type=types.Type.STRING, description="Command or URL"),
            "group": types.Schema(
                type=types.Type.STRING, description="Optional presentation group key"
            ),
        },
        required=["label", "type", "value"],
    )


def _os_content_schema() -> types.Schema:
    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            "explanation": types.Schema(type=types.Type.STRING),
            "details": types.Schema(type=types.Type.STRING),
            "actions": types.Schema(type=types.Type.ARRAY, items=_action_schema()),
        },
        required=["explanation", "details", "actions"],
    )


RESPONSE_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "title": types.Schema(type=types.Type.STRING, description="Short step title"),
            "explanation": types.Schema(
                type=types.Type.STRING, description="Beginner-friendly explanation"
            ),
            "command": types.Schema(
                type=types.Type.STRING, description="Exact terminal command, or empty"
            ),
            "details": types.Schema(type=types.Type.STRING, description="Extra notes, or empty"),
            "actions": types.Schema(type=types.Type.ARRAY, items=_action_schema()),
            "isOsSpecific": types.Schema(
                type=types.Type.BOOLEAN,
                description="True only for the environment setup step",
            ),
            "osInstructions": types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "macos_linux": _os_content_schema(),
                    "windows": _os_content_schema(),
                },
            ),
        },
        required=["title", "explanation"],
    ),
)


def parse_response_text(text: str | None) -> list[FlatStep | OsBranchingStep]:
    """Parse the service's response text into steps.

    Args:
        text: Raw response text

    Returns:
        Steps in guide order

    Raises:
        EmptyResponseError: If text is missing or blank
        MalformedResponseError: If text is not JSON or not an array of step records
    """
    if not isinstance(text, str) or not text.strip():
        logger.error(f"Gemini response was empty or not text: {text!r}")
        raise EmptyResponseError()

    try:
        payload: Any = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Could not decode Gemini response as JSON: {e}")
        logger.debug(f"Raw response text: {text}")
        raise MalformedResponseError() from e

    if not isinstance(payload, list):
        logger.error(f"Gemini response is {type(payload).__name__}, expected a JSON array")
        raise MalformedResponseError()

    try:
        return parse_steps(payload)
    except ValidationError as e:
        logger.error(f"Gemini response does not match the step shape: {e}")
        raise MalformedResponseError() from e


class GenerationClient:
    """Generates guide steps with one schema-constrained Gemini call.

    The underlying ``genai.Client`` is injected so tests can substitute a
    fake; build the real one once at startup with
    ``create_generation_client``.
    """

    def __init__(self, client: genai.Client, model: str) -> None:
        self._client = client
        self.model = model

    async def generate(self, request: GenerationRequest) -> list[FlatStep | OsBranchingStep]:
        """Generate the guide for ``request``.

        Issues exactly one call; nothing is retried and no partial result
        is ever returned.

        Raises:
            EmptyResponseError: If the service returned no usable text
            MalformedResponseError: If the text is not JSON of the expected shape
            ServiceFailureError: For any other failure of the call
        """
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=RESPONSE_SCHEMA,
        )
        logger.info(f"Requesting guide for {request.repository_url} ({self.model})")

        try:
            response = await asyncio.to_thread(
                self._client.models.generate_content,
                model=self.model,
                contents=build_prompt(request),
                config=config,
            )
        except genai_errors.APIError as e:
            logger.error(f"Gemini API error {e.code}: {e.message}")
            raise ServiceFailureError() from e
        except Exception as e:
            logger.error(f"Gemini call failed: {e}")
            raise ServiceFailureError() from e

        steps = parse_response_text(response.text)
        logger.info(f"Received {len(steps)} steps")
        return steps


def create_generation_client(config: ApkGuideConfig) -> GenerationClient:
    """Build the generation client from configuration.

    Raises:
        ConfigError: If no API key is available
    """
    api_key = config.gemini.resolve_api_key()
    return GenerationClient(genai.Client(api_key=api_key), model=config.gemini.model)
