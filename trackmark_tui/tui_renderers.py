from textual.widgets import DataTable
from textual_plotext import PlotextPlot
from trackmark_core.config import MAP_ZOOM_DEG
from trackmark_core.renderers import InMemoryListRenderer, InMemoryMarkerRenderer
from trackmark_core.table_formatters import LIST_HEADERS
from trackmark_core.workouts import Kind, Position

MARKER_STYLE = {
    Kind.RUNNING: {"marker": "dot", "color": "green"},
    Kind.CYCLING: {"marker": "dot", "color": "orange"},
}


class TableListRenderer(InMemoryListRenderer):
    """ Mirrors the rendered rows into a DataTable while one is attached """

    def __init__(self, metrics: dict | None = None):
        super().__init__(metrics)
        self.table: DataTable | None = None

    def attach(self, table: DataTable) -> None:
        self.table = table
        if len(table.columns) == 0:
            table.add_columns(*LIST_HEADERS)
        table.cursor_type = "row"
        self.on_change()

    def detach(self) -> None:
        self.table = None

    def on_change(self) -> None:
        if self.table is None:
            return
        cursor = self.table.cursor_row
        self.table.clear(columns=False)
        rows = self.table_rows()
        # Link workout id with table's row key
        for row in rows:
            self.table.add_row(*row, key=row[0])
        if rows:
            self.table.move_cursor(row=min(max(cursor, 0), len(rows) - 1))


class PlotMarkerRenderer(InMemoryMarkerRenderer):
    """ Scatter 'map' of markers, zoomed on the focused marker or the home position """

    def __init__(self):
        super().__init__()
        self.plot: PlotextPlot | None = None
        self.home: Position | None = None

    def attach(self, plot: PlotextPlot, home: Position | None = None) -> None:
        self.plot = plot
        self.home = home
        self.on_change()

    def detach(self) -> None:
        self.plot = None

    def on_change(self) -> None:
        if self.plot is None:
            return
        plt = self.plot.plt
        plt.clear_figure()
        plt.title("Map")
        plt.xlabel("Longitude")
        plt.ylabel("Latitude")

        for kind in Kind:
            pts = [m.position for m in self.markers if m.kind is kind]
            if pts:
                plt.scatter([p[1] for p in pts], [p[0] for p in pts], label=kind.display, **MARKER_STYLE[kind])

        center = self.focused or self.home
        here = self.markers_at(self.focused) if self.focused else []
        if here:
            lat, lng = self.focused
            plt.scatter([lng], [lat], marker="x", color="red")
            plt.text(" / ".join(m.description for m in here), x=lng, y=lat, color="red")
        if center:
            lat, lng = center
            plt.xlim(lng - MAP_ZOOM_DEG, lng + MAP_ZOOM_DEG)
            plt.ylim(lat - MAP_ZOOM_DEG, lat + MAP_ZOOM_DEG)

        self.plot.refresh()
