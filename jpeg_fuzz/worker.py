"""
Worker lifecycle: initialization hook once, then the per-input hook.

    UNINITIALIZED --initialize() ok--> READY --test_one_input()--> READY ...
    UNINITIALIZED --initialize() fails--> TERMINATED (exit code 3)
"""

import enum
import logging
from typing import Optional, Sequence, TextIO, Tuple

from jpeg_fuzz import init_check, target
from jpeg_fuzz.outcome import Outcome
from jpeg_fuzz.properties import ConfigSnapshot

logger = logging.getLogger(__name__)


class WorkerState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    TERMINATED = "terminated"


class Worker:
    """
    Harness front end for one worker process.

    Holds the configuration snapshot and nothing per input, so repeated
    calls with the same data behave the same.
    """

    def __init__(
        self,
        snapshot: ConfigSnapshot,
        required_keys: Sequence[str] = init_check.REQUIRED_KEYS,
        formats: Sequence[str] = target.DEFAULT_FORMATS,
        stream: Optional[TextIO] = None,
    ) -> None:
        self._snapshot = snapshot
        self._required_keys = tuple(required_keys)
        self._formats: Tuple[str, ...] = tuple(formats)
        self._stream = stream
        self._state = WorkerState.UNINITIALIZED

    @property
    def state(self) -> WorkerState:
        return self._state

    @property
    def snapshot(self) -> ConfigSnapshot:
        return self._snapshot

    @property
    def formats(self) -> Sequence[str]:
        return self._formats

    def initialize(self) -> None:
        """
        Run the propagation check, then validate the decoder formats.
        Allowed once per worker.

        Raises SystemExit(3) if a required property is missing or a format
        is unknown to Pillow; the propagation check always runs first.
        """
        if self._state is not WorkerState.UNINITIALIZED:
            raise RuntimeError(f"initialize() called in state {self._state.value}")
        try:
            init_check.verify_propagation(
                self._snapshot, self._required_keys, stream=self._stream
            )
            try:
                self._formats = target.check_formats(self._formats)
            except ValueError as e:
                init_check.fail_setup(str(e), self._stream)
        except SystemExit:
            self._state = WorkerState.TERMINATED
            raise
        self._state = WorkerState.READY
        logger.info(
            "Worker ready (required properties: %s; formats: %s)",
            ", ".join(self._required_keys),
            ", ".join(self._formats),
        )

    def test_one_input(self, data: bytes) -> Outcome:
        """libFuzzer callback. Unrecognized decoder failures propagate."""
        if self._state is not WorkerState.READY:
            raise RuntimeError(f"test_one_input() called in state {self._state.value}")
        return target.invoke(data, self._formats)
