from textual.app import App
from trackmark_cli.cli_main import configure_logging, VERSION
from trackmark_cli.cli_utils import MenuItem
from trackmark_core.bootstrap import bootstrap_context_core, resolve_db_path
from trackmark_core.config import LOG_PATH
from trackmark_core.db_schema import connect_db
from trackmark_core.metrics import build_metrics
from trackmark_core.renderers import FixedPositionProvider
from trackmark_core.usecases import delete_all_workouts
from trackmark_core.user_settings import load_json, parse_home_position, CONFIG_PATH
from trackmark_tui.screens.confirm_dialog import ConfirmDialog
from trackmark_tui.screens.menu_base import MenuBase
from trackmark_tui.screens.reports_view import ReportsView
from trackmark_tui.screens.workouts_view import WorkoutsView
from trackmark_tui.tui_renderers import TableListRenderer, PlotMarkerRenderer


class TrackmarkTui(App):
    """ The main application """

    TITLE = "Trackmark"
    SUB_TITLE = f"v{VERSION}"

    def on_mount(self):
        data = load_json(CONFIG_PATH)
        metrics = build_metrics()
        self.conn = connect_db(resolve_db_path(data))
        self.ctx = bootstrap_context_core(
            self.conn, data,
            list_renderer=TableListRenderer(metrics),
            marker_renderer=PlotMarkerRenderer(),
            position_provider=FixedPositionProvider(parse_home_position(data.get("HOME_POSITION"))),
        )

    def on_ready(self) -> None:
        self.action_open_main_menu()

    def action_open_main_menu(self):
        items = [
            MenuItem("1", "View workouts", "view_workouts"),
            MenuItem("2", "Reports", "run_reports"),
            MenuItem("3", "Delete all workouts", "delete_all"),
            MenuItem("q", "Quit", "quit"),
        ]
        self.push_screen(MenuBase("Main Menu", items))

    def action_view_workouts(self):
        self.push_screen(WorkoutsView())

    def action_run_reports(self):
        self.push_screen(ReportsView())

    def action_delete_all(self):
        self.push_screen(
            ConfirmDialog("Are you sure you want to delete all workouts?"),
            callback=self._handle_delete_all_response
        )

    def _handle_delete_all_response(self, confirmed: bool) -> None:
        if confirmed:
            self.ctx = delete_all_workouts(self.ctx)
            self.notify("All workouts deleted.", severity="information")

    def action_quit(self):
        self.conn.close()
        self.exit()


def main():
    configure_logging(LOG_PATH)
    app = TrackmarkTui()
    app.run()


if __name__ == "__main__":
    main()
