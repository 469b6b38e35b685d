from textual import on
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select

from trackmark_core.metrics import fmt_position
from trackmark_core.utils_formatting import fmt_number
from trackmark_core.workouts import Kind, Position, Workout

EXTRA_PLACEHOLDERS = {
    Kind.RUNNING: "Cadence (step/min)",
    Kind.CYCLING: "Elevation gain (m)",
}


class WorkoutForm(ModalScreen[dict | None]):
    """
    Add or edit form. Dismisses with the raw field texts
    {"kind", "distance", "duration", "extra", "position"} or None on cancel.
    Parsing and validation belong to the caller.
    """

    CSS_PATH = "../CSS/workout_form.tcss"

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
    ]

    def __init__(self, heading: str, workout: Workout | None = None, home: Position | None = None):
        super().__init__()
        self.heading = heading
        self.workout = workout
        self.home = home
        self.kind = workout.kind if workout else Kind.RUNNING

    def compose(self) -> ComposeResult:
        w = self.workout
        with Container(id="form"):
            yield Label(self.heading, id="heading")
            yield Select(
                [(k.display, k.value) for k in Kind],
                value=self.kind.value,
                allow_blank=False,
                disabled=w is not None,        # editing never changes the kind
                id="kind",
            )
            yield Input(value=fmt_number(w.distance_km) if w else "", placeholder="Distance (km)", id="distance")
            yield Input(value=fmt_number(w.duration_min) if w else "", placeholder="Duration (min)", id="duration")
            yield Input(value=fmt_number(w.extra) if w else "", placeholder=EXTRA_PLACEHOLDERS[self.kind], id="extra")
            if w is None:
                home = f" (empty = home {fmt_position(self.home)})" if self.home else ""
                yield Input(placeholder=f"Position lat,lng{home}", id="position")
            with Horizontal(id="buttons"):
                yield Button("Save", id="save", variant="primary")
                yield Button("Cancel", id="cancel")

    def on_mount(self) -> None:
        self.query_one("#distance", Input).focus()

    @on(Select.Changed, "#kind")
    def _on_kind_changed(self, event: Select.Changed) -> None:
        # Cadence and elevation share one field, swap its meaning with the kind
        self.kind = Kind(event.value)
        self.query_one("#extra", Input).placeholder = EXTRA_PLACEHOLDERS[self.kind]

    def _values(self) -> dict:
        values = {
            "kind": self.kind,
            "distance": self.query_one("#distance", Input).value,
            "duration": self.query_one("#duration", Input).value,
            "extra": self.query_one("#extra", Input).value,
            "position": "",
        }
        if self.workout is None:
            values["position"] = self.query_one("#position", Input).value.strip()
        return values

    @on(Button.Pressed, "#save")
    def _on_save(self) -> None:
        self.dismiss(self._values())

    @on(Input.Submitted)
    def _on_submitted(self) -> None:
        self.dismiss(self._values())

    @on(Button.Pressed, "#cancel")
    def _on_cancel(self) -> None:
        self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)
