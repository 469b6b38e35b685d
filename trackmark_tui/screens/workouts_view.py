from textual import on
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import Screen
from textual.widgets import Header, DataTable, Button, Footer, Label
from textual_plotext import PlotextPlot

from trackmark_core.errors import PositionUnavailableError, ValidationError
from trackmark_core.sorting import SortMode
from trackmark_core.usecases import new_workout, update_workout, delete_workout, focus_workout, sort_workouts
from trackmark_core.validators import parse_number, parse_position
from trackmark_tui.screens.workout_form import WorkoutForm

SORT_LABELS = {
    SortMode.UNSORTED: "Original order",
    SortMode.CYCLING_FIRST: "Cycling first",
    SortMode.RUNNING_FIRST: "Running first",
}


class WorkoutsView(Screen):
    """ The workout list next to the map, every change goes through the use cases """

    CSS_PATH = "../CSS/workouts_view.tcss"

    BINDINGS = [
        ("escape", "back", "Back to main menu"),
        ("a", "add", "Add"),
        ("e", "edit", "Edit"),
        ("d", "delete", "Delete"),
        ("s", "sort", "Sort"),
        ("f", "focus_selected", "Show on map"),
        ("x", "delete_all", "Delete all"),
    ]

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="body"):
            with Container(id="table_wrapper"):
                yield DataTable(id="workout_list")
            yield PlotextPlot(id="map")
        with Horizontal(id="button_wrapper"):
            yield Label("", id="sort_label")
            yield Label("", id="log")
            yield Button(label="Back", id="back")
        yield Footer()

    @property
    def ctx(self):
        return self.app.ctx

    def on_mount(self) -> None:
        self.ctx.list_renderer.attach(self.query_one("#workout_list", DataTable))
        self.ctx.marker_renderer.attach(self.query_one("#map", PlotextPlot), self.ctx.home_position)
        self._update_sort_label()
        self.query_one("#workout_list", DataTable).focus()

    def on_unmount(self) -> None:
        self.ctx.list_renderer.detach()
        self.ctx.marker_renderer.detach()

    def on_screen_resume(self) -> None:
        # the context may have been rebuilt while another screen was on top
        self._update_sort_label()

    def _selected_id(self) -> str | None:
        table = self.query_one("#workout_list", DataTable)
        order = self.ctx.list_renderer.order()
        row = table.cursor_row
        if row is None or not (0 <= row < len(order)):
            return None
        return order[row]

    def _update_sort_label(self) -> None:
        self.query_one("#sort_label", Label).update(f"↕ {SORT_LABELS[self.ctx.sorter.mode]}")

    def _log(self, message: str) -> None:
        self.query_one("#log", Label).update(message)

    # ---------------- add / edit ---------------- #
    def action_add(self) -> None:
        self.app.push_screen(WorkoutForm("New workout", home=self.ctx.home_position), callback=self._handle_new)

    def _handle_new(self, values: dict | None) -> None:
        if values is None:
            return
        try:
            distance = parse_number(values["distance"])
            duration = parse_number(values["duration"])
            extra = parse_number(values["extra"])
            position = parse_position(values["position"]) if values["position"] else None
            workout = new_workout(self.ctx, values["kind"], distance, duration, extra, position=position)
        except (ValidationError, PositionUnavailableError) as e:
            self.app.notify(str(e), severity="error")
            return
        self._log(f"Added {workout.label}")

    def action_edit(self) -> None:
        workout_id = self._selected_id()
        workout = self.ctx.collection.find_by_id(workout_id) if workout_id else None
        if workout is None:
            return
        self.app.push_screen(
            WorkoutForm(f"Edit {workout.label}", workout=workout),
            callback=lambda values: self._handle_edit(workout_id, values),
        )

    def _handle_edit(self, workout_id: str, values: dict | None) -> None:
        if values is None:
            return
        try:
            updated = update_workout(
                self.ctx, workout_id,
                parse_number(values["distance"]),
                parse_number(values["duration"]),
                parse_number(values["extra"]),
            )
        except ValidationError as e:
            self.app.notify(str(e), severity="error")
            return
        if updated is not None:
            self._log(f"Saved {updated.label}")

    # ---------------- delete / sort / focus ---------------- #
    def action_delete(self) -> None:
        workout_id = self._selected_id()
        if workout_id is None:
            return
        removed = delete_workout(self.ctx, workout_id)
        if removed is not None:
            self._log(f"Deleted {removed.label}")

    def action_delete_all(self) -> None:
        self.app.action_delete_all()

    def action_sort(self) -> None:
        sort_workouts(self.ctx)
        self._update_sort_label()

    def action_focus_selected(self) -> None:
        workout_id = self._selected_id()
        if workout_id is not None:
            focus_workout(self.ctx, workout_id)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        focus_workout(self.ctx, str(event.row_key.value))

    def action_back(self) -> None:
        self.app.pop_screen()

    @on(Button.Pressed, "#back")
    async def _on_back_pressed(self, event: Button.Pressed) -> None:
        await self.run_action("back")
