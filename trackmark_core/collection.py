from typing import Iterable, Iterator
from trackmark_core.workouts import Workout


class WorkoutCollection:
    """ Ordered workouts in insertion order, ids are the exchange key """

    def __init__(self, workouts: Iterable[Workout] = ()):
        self._workouts: list[Workout] = list(workouts)

    def __len__(self) -> int:
        return len(self._workouts)

    def __iter__(self) -> Iterator[Workout]:
        return iter(tuple(self._workouts))

    def __contains__(self, workout_id: object) -> bool:
        return self._index_of(workout_id) is not None

    def _index_of(self, workout_id) -> int | None:
        for i, workout in enumerate(self._workouts):
            if workout.id == workout_id:
                return i
        return None

    def append(self, workout: Workout) -> None:
        """ Adds at the end, uniqueness of ids is the caller's creation policy """
        self._workouts.append(workout)

    def find_by_id(self, workout_id: str) -> Workout | None:
        idx = self._index_of(workout_id)
        return self._workouts[idx] if idx is not None else None

    def replace_at(self, workout_id: str, new_workout: Workout) -> bool:
        """ Swap in place keeping the position in the order, no-op when the id is absent """
        idx = self._index_of(workout_id)
        if idx is None:
            return False
        self._workouts[idx] = new_workout
        return True

    def remove_by_id(self, workout_id: str) -> Workout | None:
        idx = self._index_of(workout_id)
        if idx is None:
            return None
        return self._workouts.pop(idx)

    def all(self) -> tuple[Workout, ...]:
        return tuple(self._workouts)

    def ids(self) -> list[str]:
        return [w.id for w in self._workouts]

    def clear(self) -> None:
        self._workouts.clear()
