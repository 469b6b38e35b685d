import pandas as pd
from textual import on
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import Header, DataTable, Button, Footer, Label

from trackmark_core.reports import kind_summary, weekly_summary
from trackmark_core.table_formatters import kind_summary_fmt, weekly_table_fmt


class ReportsView(Screen):

    CSS_PATH = "../CSS/reports_view.tcss"

    BINDINGS = [
        ("escape", "back", "Back"),
    ]

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="table_wrapper"):
            yield Label("Totals by type", classes="section")
            yield DataTable(id="kind_summary")
            yield Label("", id="weekly_label", classes="section")
            yield DataTable(id="weekly_summary")
        yield Button("Back", id="back")
        yield Footer()

    def on_mount(self) -> None:
        ctx = self.app.ctx
        self._fill(self.query_one("#kind_summary", DataTable),
                   kind_summary_fmt(kind_summary(ctx.collection), ctx.metrics))
        self._fill(self.query_one("#weekly_summary", DataTable),
                   weekly_table_fmt(weekly_summary(ctx.collection, ctx.tzinfo), ctx.metrics))
        self.query_one("#weekly_label", Label).update(f"Weekly totals ({ctx.tz_str})")

    @staticmethod
    def _fill(table: DataTable, df: pd.DataFrame) -> None:
        table.clear(columns=True)
        table.add_columns(*[str(c) for c in df.columns])
        for row in df.itertuples(index=False):
            table.add_row(*[str(v) for v in row])

    def action_back(self) -> None:
        self.app.pop_screen()

    @on(Button.Pressed, "#back")
    async def _on_back_pressed(self, event: Button.Pressed) -> None:
        await self.run_action("back")
