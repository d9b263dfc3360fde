"""Request lifecycle for one guide generation.

The controller is a small asyncio state machine:

    IDLE --submit--> VALIDATING --+--> INPUT_INVALID (error set, no request)
                                  +--> IN_PROGRESS --+--> READY  (steps stored)
                                                     +--> FAILED (message stored)
    READY | FAILED | INPUT_INVALID | IN_PROGRESS --reset--> IDLE

While IN_PROGRESS a timer advances a phase counter through a fixed list of
status messages, one per tick. The phases are cosmetic: they say nothing
about the progress of the real request, which is only started once the
timer has walked through every message.

Reset cancels a pending timer. A call that has already been issued is not
cancelled; its outcome is discarded because it no longer belongs to the
active request.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from ..constants import REPOSITORY_HOST_MARKER, STATUS_INTERVAL, STATUS_MESSAGES
from ..errors import (
    GENERIC_FAILURE_MESSAGE,
    GenerationError,
    InvalidInputError,
    LifecycleError,
)
from ..models import FlatStep, GenerationRequest, OperatingSystem, OsBranchingStep

logger = logging.getLogger(__name__)


class LifecycleState(str, Enum):
    """States of a guide generation."""

    IDLE = "idle"
    VALIDATING = "validating"
    INPUT_INVALID = "input_invalid"
    IN_PROGRESS = "in_progress"
    READY = "ready"
    FAILED = "failed"


_SUBMITTABLE = frozenset({LifecycleState.IDLE, LifecycleState.INPUT_INVALID})


class StepGenerator(Protocol):
    """Anything that can turn a request into steps (e.g. GenerationClient)."""

    async def generate(
        self, request: GenerationRequest
    ) -> list[FlatStep | OsBranchingStep]: ...


@dataclass(frozen=True)
class ControllerSnapshot:
    """Immutable view of the controller for rendering."""

    state: LifecycleState
    phase: int
    status_messages: tuple[str, ...]
    steps: tuple[FlatStep | OsBranchingStep, ...]
    error: str | None
    operating_system: OperatingSystem | None
    repository_url: str

    @property
    def current_status_message(self) -> str | None:
        if not self.status_messages:
            return None
        return self.status_messages[min(self.phase, len(self.status_messages) - 1)]


def validate_repository_url(repository_url: str) -> str:
    """Return the stripped URL, or raise if it is blank or not on GitHub.

    Raises:
        InvalidInputError: If the URL fails the check
    """
    url = repository_url.strip()
    if not url or REPOSITORY_HOST_MARKER not in url:
        raise InvalidInputError()
    return url


class GenerationController:
    """Coordinates input validation, status phases and the generation call.

    Args:
        client: Step generator, usually a GenerationClient
        status_messages: Cosmetic progress messages, one per tick
        tick_interval: Seconds between phase advances
        listener: Called with a snapshot after every change
    """

    def __init__(
        self,
        client: StepGenerator,
        *,
        status_messages: Sequence[str] = STATUS_MESSAGES,
        tick_interval: float = STATUS_INTERVAL,
        listener: Callable[[ControllerSnapshot], None] | None = None,
    ) -> None:
        self._client = client
        self.status_messages = tuple(status_messages)
        self.tick_interval = tick_interval
        self.listener = listener

        self.state = LifecycleState.IDLE
        self.phase = 0
        self.steps: tuple[FlatStep | OsBranchingStep, ...] = ()
        self.error: str | None = None
        self.operating_system: OperatingSystem | None = None
        self.repository_url = ""

        self._token = 0
        self._timer_task: asyncio.Task[None] | None = None
        self._call_task: asyncio.Task[None] | None = None
        self._discarded: set[asyncio.Task[None]] = set()

    def snapshot(self) -> ControllerSnapshot:
        return ControllerSnapshot(
            state=self.state,
            phase=self.phase,
            status_messages=self.status_messages,
            steps=self.steps,
            error=self.error,
            operating_system=self.operating_system,
            repository_url=self.repository_url,
        )

    def _notify(self) -> None:
        if self.listener is not None:
            self.listener(self.snapshot())

    def _set_state(self, state: LifecycleState) -> None:
        logger.debug(f"Lifecycle {self.state.value} -> {state.value}")
        self.state = state
        self._notify()

    def select_operating_system(self, operating_system: OperatingSystem | None) -> None:
        """Store the user's upfront operating system choice."""
        self.operating_system = operating_system
        self._notify()

    def submit(self, repository_url: str, platform_version: str) -> bool:
        """Validate input and start a generation.

        Must be called from a running event loop.

        Returns:
            True if a generation started, False if the input was rejected

        Raises:
            LifecycleError: If a generation is running or a result is shown
        """
        if self.state not in _SUBMITTABLE:
            raise LifecycleError(f"Cannot submit while {self.state.value}; reset first")

        self.repository_url = repository_url
        self._set_state(LifecycleState.VALIDATING)
        try:
            url = validate_repository_url(repository_url)
        except InvalidInputError as e:
            logger.info(f"Rejected repository URL: {repository_url!r}")
            self.error = str(e)
            self._set_state(LifecycleState.INPUT_INVALID)
            return False

        request = GenerationRequest(
            repository_url=url,
            platform_version=platform_version,
            operating_system=self.operating_system,
        )
        self.error = None
        self.steps = ()
        self.phase = 0
        self._token += 1
        self._set_state(LifecycleState.IN_PROGRESS)
        self._timer_task = asyncio.get_running_loop().create_task(
            self._run_phases(request, self._token)
        )
        return True

    async def _run_phases(self, request: GenerationRequest, token: int) -> None:
        while self.phase < len(self.status_messages):
            await asyncio.sleep(self.tick_interval)
            self.phase += 1
            self._notify()
        if token != self._token:
            return
        self._timer_task = None
        self._call_task = asyncio.get_running_loop().create_task(self._invoke(request, token))

    async def _invoke(self, request: GenerationRequest, token: int) -> None:
        try:
            steps = await self._client.generate(request)
        except GenerationError as e:
            self._finish(token, error=str(e))
        except Exception:
            logger.exception("Unexpected failure while generating the guide")
            self._finish(token, error=GENERIC_FAILURE_MESSAGE)
        else:
            self._finish(token, steps=tuple(steps))

    def _finish(
        self,
        token: int,
        *,
        steps: tuple[FlatStep | OsBranchingStep, ...] = (),
        error: str | None = None,
    ) -> None:
        if token != self._token or self.state is not LifecycleState.IN_PROGRESS:
            logger.debug("Discarding outcome of a request that is no longer active")
            return
        self._call_task = None
        if error is not None:
            self.error = error
            self._set_state(LifecycleState.FAILED)
        else:
            self.steps = steps
            self._set_state(LifecycleState.READY)

    def reset(self) -> None:
        """Return to IDLE, clearing steps, error, phase and OS choice."""
        if self._timer_task is not None and not self._timer_task.done():
            self._timer_task.cancel()
        self._timer_task = None
        if self._call_task is not None and not self._call_task.done():
            self._discarded.add(self._call_task)
            self._call_task.add_done_callback(self._discarded.discard)
        self._call_task = None

        self._token += 1
        self.steps = ()
        self.error = None
        self.phase = 0
        self.operating_system = None
        self.repository_url = ""
        self._set_state(LifecycleState.IDLE)

    async def wait(self) -> ControllerSnapshot:
        """Wait for all outstanding timer and call work, then return a snapshot."""
        while True:
            pending = {
                task
                for task in (self._timer_task, self._call_task, *self._discarded)
                if task is not None and not task.done()
            }
            if not pending:
                return self.snapshot()
            await asyncio.wait(pending)
