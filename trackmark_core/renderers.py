"""
Collaborators the use cases call into: where a new workout is, how it is
drawn on the map, and how it is shown in the list. Hosts supply their own
implementations, the in-memory ones here hold the state the hosts draw
from and are enough on their own for tests.
"""
import logging
from dataclasses import dataclass
from typing import Protocol, Any
from trackmark_core.errors import PositionUnavailableError
from trackmark_core.table_formatters import format_workout_fields, format_list_row, marker_popup
from trackmark_core.workouts import Kind, Position, Workout


class PositionProvider(Protocol):
    def get_position(self) -> Position:
        """ One-shot (lat, lng), raises PositionUnavailableError """
        ...


class MarkerRenderer(Protocol):
    def add_marker(self, position: Position, kind: Kind, description: str) -> Any: ...
    def remove_marker(self, position: Position, description: str | None = None) -> None: ...
    def focus(self, position: Position) -> None: ...
    def clear(self) -> None: ...


class ListRenderer(Protocol):
    def render(self, workout: Workout) -> None: ...
    def update_field(self, workout_id: str, field: str, value: str) -> None: ...
    def remove(self, workout_id: str) -> None: ...
    def order(self) -> list[str]: ...
    def reorder(self, ids: list[str]) -> None: ...
    def clear(self) -> None: ...


class FixedPositionProvider:
    """ Hands out one preset position, or fails when there is none """

    def __init__(self, position: Position | None = None):
        self.position = position

    def get_position(self) -> Position:
        if self.position is None:
            raise PositionUnavailableError()
        return self.position


@dataclass
class Marker:
    position: Position
    kind: Kind
    description: str

    @property
    def popup(self) -> str:
        return marker_popup(self.kind, self.description)


class InMemoryMarkerRenderer:
    """ One marker per add_marker call, several may share a position. The last focus is remembered """

    def __init__(self):
        self.markers: list[Marker] = []
        self.focused: Position | None = None

    def markers_at(self, position: Position) -> list[Marker]:
        return [m for m in self.markers if m.position == tuple(position)]

    def add_marker(self, position: Position, kind: Kind, description: str) -> Marker:
        marker = Marker(tuple(position), kind, description)
        self.markers.append(marker)
        self.on_change()
        return marker

    def remove_marker(self, position: Position, description: str | None = None) -> None:
        """ Remove one marker at position, the one with description when there is such a marker """
        here = self.markers_at(position)
        if not here:
            return
        match = next((m for m in here if m.description == description), here[0])
        self.markers.remove(match)
        if self.focused == match.position and len(here) == 1:
            self.focused = None
        self.on_change()

    def focus(self, position: Position) -> None:
        self.focused = tuple(position)
        self.on_change()

    def clear(self) -> None:
        self.markers.clear()
        self.focused = None
        self.on_change()

    def on_change(self) -> None:
        """ Hook for hosts that redraw on every change """


class InMemoryListRenderer:
    """ Rows of display fields in render order, newest rows go to the top """

    def __init__(self, metrics: dict | None = None):
        self.metrics = metrics
        self.rows: dict[str, dict[str, str]] = {}
        self.kinds: dict[str, Kind] = {}
        self._order: list[str] = []

    def render(self, workout: Workout) -> None:
        self.rows[workout.id] = format_workout_fields(workout, self.metrics)
        self.kinds[workout.id] = workout.kind
        if workout.id in self._order:
            self._order.remove(workout.id)
        self._order.insert(0, workout.id)
        self.on_change()

    def update_field(self, workout_id: str, field: str, value: str) -> None:
        row = self.rows.get(workout_id)
        if row is None:
            logging.debug(f"No rendered row for {workout_id}, skipping update of '{field}'")
            return
        row[field] = value
        self.on_change()

    def remove(self, workout_id: str) -> None:
        if self.rows.pop(workout_id, None) is None:
            return
        self.kinds.pop(workout_id, None)
        self._order.remove(workout_id)
        self.on_change()

    def order(self) -> list[str]:
        return list(self._order)

    def reorder(self, ids: list[str]) -> None:
        known = [wid for wid in ids if wid in self.rows]
        rest = [wid for wid in self._order if wid not in known]
        self._order = known + rest
        self.on_change()

    def clear(self) -> None:
        self.rows.clear()
        self.kinds.clear()
        self._order.clear()
        self.on_change()

    def table_rows(self) -> list[list[str]]:
        """ Display rows in render order """
        return [format_list_row(wid, self.kinds[wid], self.rows[wid], self.metrics) for wid in self._order]

    def on_change(self) -> None:
        """ Hook for hosts that redraw on every change """
