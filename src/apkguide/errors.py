"""Error taxonomy for apkguide."""

GENERIC_FAILURE_MESSAGE = (
    "Could not get a structured answer from the AI. The project may be too complex "
    "or the service is temporarily unavailable."
)
EMPTY_RESPONSE_MESSAGE = "The AI returned an empty response or an unexpected format."
MALFORMED_RESPONSE_MESSAGE = "The AI returned a badly formatted response (invalid JSON)."
INVALID_REPOSITORY_MESSAGE = "Please enter a valid GitHub repository URL."


class GuideError(Exception):
    """Base exception for apkguide errors."""


class ConfigError(GuideError):
    """Raised when configuration is missing or invalid."""


class InvalidInputError(GuideError):
    """Raised when the submitted repository locator fails validation."""

    def __init__(self, message: str = INVALID_REPOSITORY_MESSAGE) -> None:
        super().__init__(message)


class LifecycleError(GuideError):
    """Raised when a lifecycle transition is not allowed in the current state."""


class GenerationError(GuideError):
    """Base exception for failures of the generation call."""


class EmptyResponseError(GenerationError):
    """The generation service returned no usable text."""

    def __init__(self, message: str = EMPTY_RESPONSE_MESSAGE) -> None:
        super().__init__(message)


class MalformedResponseError(GenerationError):
    """The generation service returned text that is not JSON of the expected shape."""

    def __init__(self, message: str = MALFORMED_RESPONSE_MESSAGE) -> None:
        super().__init__(message)


class ServiceFailureError(GenerationError):
    """Any other transport or call-level failure."""

    def __init__(self, message: str = GENERIC_FAILURE_MESSAGE) -> None:
        super().__init__(message)
