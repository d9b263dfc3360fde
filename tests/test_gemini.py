"""Tests for the Gemini generation client."""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from google.genai import errors as genai_errors
from google.genai import types

from apkguide.config import ApkGuideConfig, GeminiConfig
from apkguide.errors import (
    EMPTY_RESPONSE_MESSAGE,
    GENERIC_FAILURE_MESSAGE,
    MALFORMED_RESPONSE_MESSAGE,
    ConfigError,
    EmptyResponseError,
    MalformedResponseError,
    ServiceFailureError,
)
from apkguide.models import FlatStep, GenerationRequest, OsBranchingStep
from apkguide.services.gemini import (
    RESPONSE_SCHEMA,
    GenerationClient,
    create_generation_client,
    parse_response_text,
)


@pytest.mark.unit
class TestParseResponseText:
    """Tests for parse_response_text."""

    def test_minimal_step(self) -> None:
        steps = parse_response_text('[{"title":"T","explanation":"E"}]')
        assert len(steps) == 1
        assert isinstance(steps[0], FlatStep)
        assert steps[0].command is None
        assert steps[0].actions == []

    def test_null_os_flag_is_flat(self) -> None:
        steps = parse_response_text('[{"title":"T","explanation":"E","isOsSpecific":null}]')
        assert len(steps) == 1
        assert isinstance(steps[0], FlatStep)

    @pytest.mark.parametrize("text", [None, "", "   \n"])
    def test_empty_text(self, text: str | None) -> None:
        with pytest.raises(EmptyResponseError) as exc_info:
            parse_response_text(text)
        assert str(exc_info.value) == EMPTY_RESPONSE_MESSAGE

    def test_not_json(self) -> None:
        with pytest.raises(MalformedResponseError) as exc_info:
            parse_response_text("not json")
        assert str(exc_info.value) == MALFORMED_RESPONSE_MESSAGE

    def test_object_instead_of_array(self) -> None:
        with pytest.raises(MalformedResponseError):
            parse_response_text('{"title": "T"}')

    def test_wrong_shape(self) -> None:
        with pytest.raises(MalformedResponseError):
            parse_response_text('[{"title": "T", "actions": [{"label": "x"}]}]')

    def test_empty_array_is_valid(self) -> None:
        assert parse_response_text("[]") == []


@pytest.mark.asyncio
@pytest.mark.unit
class TestGenerationClient:
    """Tests for GenerationClient.generate."""

    async def test_returns_steps_in_order(
        self,
        generation_client: GenerationClient,
        fake_genai: MagicMock,
        request_model: GenerationRequest,
        sample_steps_json: str,
    ) -> None:
        fake_genai.models.generate_content.return_value = SimpleNamespace(text=sample_steps_json)

        steps = await generation_client.generate(request_model)

        assert [type(step) for step in steps] == [FlatStep, OsBranchingStep, FlatStep]
        assert steps[0].title == "Step 1: Basic tools"

    async def test_issues_one_schema_constrained_call(
        self,
        generation_client: GenerationClient,
        fake_genai: MagicMock,
        request_model: GenerationRequest,
    ) -> None:
        await generation_client.generate(request_model)

        fake_genai.models.generate_content.assert_called_once()
        kwargs = fake_genai.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert request_model.repository_url in kwargs["contents"]
        assert request_model.platform_version in kwargs["contents"]
        config = kwargs["config"]
        assert isinstance(config, types.GenerateContentConfig)
        assert config.response_mime_type == "application/json"
        assert config.response_schema == RESPONSE_SCHEMA

    async def test_empty_response(
        self,
        generation_client: GenerationClient,
        fake_genai: MagicMock,
        request_model: GenerationRequest,
    ) -> None:
        fake_genai.models.generate_content.return_value = SimpleNamespace(text=None)
        with pytest.raises(EmptyResponseError):
            await generation_client.generate(request_model)

    async def test_malformed_response(
        self,
        generation_client: GenerationClient,
        fake_genai: MagicMock,
        request_model: GenerationRequest,
    ) -> None:
        fake_genai.models.generate_content.return_value = SimpleNamespace(text="not json")
        with pytest.raises(MalformedResponseError):
            await generation_client.generate(request_model)

    async def test_api_error_is_service_failure(
        self,
        generation_client: GenerationClient,
        fake_genai: MagicMock,
        request_model: GenerationRequest,
    ) -> None:
        fake_genai.models.generate_content.side_effect = genai_errors.APIError(
            503, {"error": {"message": "overloaded", "status": "UNAVAILABLE"}}
        )
        with pytest.raises(ServiceFailureError) as exc_info:
            await generation_client.generate(request_model)
        assert str(exc_info.value) == GENERIC_FAILURE_MESSAGE
        assert isinstance(exc_info.value.__cause__, genai_errors.APIError)

    async def test_transport_error_is_service_failure(
        self,
        generation_client: GenerationClient,
        fake_genai: MagicMock,
        request_model: GenerationRequest,
    ) -> None:
        fake_genai.models.generate_content.side_effect = ConnectionError("offline")
        with pytest.raises(ServiceFailureError):
            await generation_client.generate(request_model)


@pytest.mark.unit
class TestResponseSchema:
    """Tests for the response schema sent with every call."""

    def test_top_level_is_array_of_objects(self) -> None:
        assert RESPONSE_SCHEMA.type == types.Type.ARRAY
        assert RESPONSE_SCHEMA.items is not None
        assert RESPONSE_SCHEMA.items.type == types.Type.OBJECT

    def test_required_fields(self) -> None:
        assert RESPONSE_SCHEMA.items.required == ["title", "explanation"]

    def test_os_branches_present(self) -> None:
        os_schema = RESPONSE_SCHEMA.items.properties["osInstructions"]
        assert set(os_schema.properties) == {"macos_linux", "windows"}

    def test_action_type_enum(self) -> None:
        action = RESPONSE_SCHEMA.items.properties["actions"].items
        assert action.properties["type"].enum == ["command", "link"]


@pytest.mark.unit
class TestCreateGenerationClient:
    """Tests for create_generation_client."""

    def test_uses_configured_key_and_model(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_KEY", "secret")
        config = ApkGuideConfig(gemini=GeminiConfig(model="m", api_key_env="MY_KEY"))
        with patch("apkguide.services.gemini.genai.Client") as client_cls:
            client = create_generation_client(config)
        client_cls.assert_called_once_with(api_key="secret")
        assert client.model == "m"

    def test_missing_key_raises_config_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("API_KEY", raising=False)
        with pytest.raises(ConfigError, match="GEMINI_API_KEY"):
            create_generation_client(ApkGuideConfig())
