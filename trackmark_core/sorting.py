"""
Three-way cyclic sort over the rendered list.

The engine only reorders a view (the list renderer's current order). The
canonical collection order is never touched. Modes cycle
UNSORTED -> CYCLING_FIRST -> RUNNING_FIRST -> UNSORTED, the last step
restoring the baseline order captured once at startup.
"""
from enum import Enum
from typing import Sequence
from trackmark_core.workouts import Kind, Workout


class SortMode(str, Enum):
    UNSORTED = "unsorted"
    CYCLING_FIRST = "cycling"
    RUNNING_FIRST = "running"


NEXT_MODE = {
    SortMode.UNSORTED: SortMode.CYCLING_FIRST,
    SortMode.CYCLING_FIRST: SortMode.RUNNING_FIRST,
    SortMode.RUNNING_FIRST: SortMode.UNSORTED,
}

TARGET_KIND = {
    SortMode.CYCLING_FIRST: Kind.CYCLING,
    SortMode.RUNNING_FIRST: Kind.RUNNING,
}


class SortEngine:

    def __init__(self):
        self.mode = SortMode.UNSORTED
        self._baseline: list[str] | None = None

    @property
    def baseline(self) -> list[str]:
        return list(self._baseline or [])

    @property
    def initialized(self) -> bool:
        return self._baseline is not None

    def capture_baseline(self, ids: Sequence[str]) -> None:
        """ Record the original render order, allowed exactly once """
        if self._baseline is not None:
            raise RuntimeError("Sort baseline already captured")
        self._baseline = list(ids)

    def track(self, workout_id: str, index: int = 0) -> None:
        """ Add an item rendered after startup, new rows render at the top by default """
        if self._baseline is None or workout_id in self._baseline:
            return
        self._baseline.insert(index, workout_id)

    def forget(self, workout_id: str) -> None:
        if self._baseline is not None and workout_id in self._baseline:
            self._baseline.remove(workout_id)

    def cycle(self, view: Sequence[Workout]) -> list[Workout]:
        """ Advance the mode and return the reordered view """
        if self._baseline is None:
            raise RuntimeError("capture_baseline() must be called before sorting")

        self.mode = NEXT_MODE[self.mode]

        if self.mode is SortMode.UNSORTED:
            rank = {wid: i for i, wid in enumerate(self._baseline)}
            # unknown ids go last, sorted() keeps their current relative order
            return sorted(view, key=lambda w: rank.get(w.id, len(rank)))

        target = TARGET_KIND[self.mode]
        return sorted(view, key=lambda w: 0 if w.kind is target else 1)
