from trackmark_cli.cli_utils import print_list_table
from trackmark_core.errors import PositionUnavailableError, ValidationError
from trackmark_core.metrics import fmt_position
from trackmark_core.renderers import InMemoryListRenderer, InMemoryMarkerRenderer
from trackmark_core.table_formatters import LIST_HEADERS
from trackmark_core.validators import parse_position
from trackmark_core.workouts import Position


class PromptPositionProvider:
    """ Asks for 'lat,lng' each time, empty input uses the home position """

    def __init__(self, home: Position | None = None):
        self.home = home

    def get_position(self) -> Position:
        hint = f" [{fmt_position(self.home)}]" if self.home else ""
        raw = input(f"📍 Position lat,lng{hint}: ").strip()
        if not raw:
            if self.home is None:
                raise PositionUnavailableError()
            return self.home
        try:
            return parse_position(raw)
        except ValidationError as e:
            raise PositionUnavailableError(f"Could not get your position: {e}") from e


class PrintListRenderer(InMemoryListRenderer):
    """ Keeps rows in memory and prints them as a table on demand """

    def show(self) -> None:
        print_list_table(self.table_rows(), LIST_HEADERS)


class PrintMarkerRenderer(InMemoryMarkerRenderer):
    """ Map markers as a printed table, focusing prints where the map moved """

    def focus(self, position: Position) -> None:
        super().focus(position)
        here = self.markers_at(position)
        popup = f" ➜ {', '.join(m.popup for m in here)}" if here else ""
        print(f"🗺️ Map centered on {fmt_position(position)}{popup}")

    def show(self) -> None:
        rows = []
        for marker in self.markers:
            flag = "●" if marker.position == self.focused else ""
            rows.append([flag, fmt_position(marker.position), marker.popup])
        print_list_table(rows, ["", "Position", "Marker"])
