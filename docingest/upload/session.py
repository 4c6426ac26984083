from enum import Enum

from docingest.logging.logger import Log
from docingest.upload.exceptions import ConflictStateError
from docingest.upload.models import DuplicateConflict


class ConflictState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    RESOLVING = "resolving"


class UploadSession:
    """Owns the single pending duplicate conflict for one caller.

    Written by the coordinator (hold) and the resolver (begin_resolving, clear).
    Transitions are synchronous, so they never interleave across awaits.
    """

    def __init__(self) -> None:
        self._state = ConflictState.IDLE
        self._conflict: DuplicateConflict | None = None

    @property
    def state(self) -> ConflictState:
        return self._state

    @property
    def conflict(self) -> DuplicateConflict | None:
        return self._conflict

    @property
    def has_conflict(self) -> bool:
        return self._conflict is not None

    def hold(self, conflict: DuplicateConflict) -> None:
        if self._state is not ConflictState.IDLE:
            raise ConflictStateError(
                f"Cannot hold a new conflict while session is {self._state.value}"
            )
        self._conflict = conflict
        self._state = ConflictState.PENDING
        Log.info(f"Duplicate conflict pending for {conflict.file.name}")

    def begin_resolving(self) -> DuplicateConflict:
        if self._state is not ConflictState.PENDING or self._conflict is None:
            raise ConflictStateError(
                f"No pending conflict to resolve (session is {self._state.value})"
            )
        self._state = ConflictState.RESOLVING
        return self._conflict

    def clear(self) -> None:
        self._conflict = None
        self._state = ConflictState.IDLE
