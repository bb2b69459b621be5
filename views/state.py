from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OpState(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class OpResult:
    """Outcome of one controller operation, ready to show to the user."""

    state: OpState
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.state is OpState.SUCCEEDED

    @classmethod
    def idle(cls, message: str = "") -> "OpResult":
        return cls(OpState.IDLE, message)

    @classmethod
    def success(cls, message: str = "") -> "OpResult":
        return cls(OpState.SUCCEEDED, message)

    @classmethod
    def failure(cls, message: str) -> "OpResult":
        return cls(OpState.FAILED, message)


class OperationTracker:
    """Per-operation ``OpState`` map for one view."""

    def __init__(self, *names: str) -> None:
        self._states: dict[str, OpState] = {name: OpState.IDLE for name in names}
        self._last: dict[str, OpResult] = {}

    def __getitem__(self, name: str) -> OpState:
        return self._states.get(name, OpState.IDLE)

    def start(self, name: str) -> None:
        self._states[name] = OpState.IN_FLIGHT

    def finish(self, name: str, result: OpResult) -> OpResult:
        self._states[name] = result.state
        self._last[name] = result
        return result

    def last(self, name: str) -> OpResult:
        return self._last.get(name, OpResult.idle())

    def in_flight(self, name: str) -> bool:
        return self[name] is OpState.IN_FLIGHT

    def snapshot(self) -> dict[str, str]:
        return {name: state.value for name, state in self._states.items()}
