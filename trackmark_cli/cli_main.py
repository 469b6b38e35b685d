import logging
import sys
from pathlib import Path
from trackmark_cli.cli_renderers import PrintListRenderer, PrintMarkerRenderer, PromptPositionProvider
from trackmark_cli.prompts import ensure_default_timezone, prompt_yes_no
from trackmark_core.bootstrap import bootstrap_context_core, resolve_db_path
from trackmark_core.db_schema import connect_db
from trackmark_core.errors import ValidationError
from trackmark_core.metrics import build_metrics
from trackmark_core.runtime_context import AppContext
from trackmark_core.user_settings import CONFIG_PATH, load_json, parse_home_position, set_saved_home_position
from trackmark_core.validators import parse_position
from trackmark_core.version import get_git_version


VERSION = get_git_version()


def configure_logging(log_file: Path | None = None):
    """ Set logging level based on --debug, optionally into a file """
    debug = ("--debug" in sys.argv) or ("-d" in sys.argv)
    if debug and log_file is None:
        print("🔧 Debug mode enabled")
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
        filename=str(log_file) if log_file else None,
    )


def bootstrap_defaults_interactive() -> dict:
    """
    - Loads saved settings (timezone, home position, db path)
    - Prompts once for a missing timezone and stores it
    - Offers to store a home position used as the default workout position
    - Returns the settings dict for the pure bootstrap
    """
    ensure_default_timezone()
    data = load_json(CONFIG_PATH)

    if not data.get("HOME_POSITION") and prompt_yes_no("🏠 Save a home position for new workouts?", default=False):
        raw = input("📍 Home position lat,lng: ").strip()
        try:
            home = parse_position(raw)
            set_saved_home_position(home)
            data["HOME_POSITION"] = list(home)
        except ValidationError as e:
            print(f"⚠️ {e}. Continuing without a home position.")

    return data


def launcher_menu(ctx: AppContext) -> AppContext:
    """ The app's starting menu, returns the context it ended with """
    from trackmark_cli.cli_reports import reports_menu
    from trackmark_cli.cli_workouts import (add_workout_menu, view_workouts, view_map, focus_workout_menu,
                                            edit_workout_menu, delete_workout_menu, sort_menu, delete_all_menu)

    while True:
        print("\n🏁 What would you like to do?")
        print("[1] Add workout")
        print("[2] View workouts")
        print("[3] View map markers")
        print("[4] Show workout on map")
        print("[5] Edit workout")
        print("[6] Delete workout")
        print("[7] Sort list")
        print("[8] Reports")
        print("[9] Delete all workouts")
        print("[q] Quit")
        choice = input("> ").strip().lower()

        if choice == "1":
            add_workout_menu(ctx)

        elif choice == "2":
            view_workouts(ctx)

        elif choice == "3":
            view_map(ctx)

        elif choice == "4":
            focus_workout_menu(ctx)

        elif choice == "5":
            edit_workout_menu(ctx)

        elif choice == "6":
            delete_workout_menu(ctx)

        elif choice == "7":
            sort_menu(ctx)

        elif choice == "8":
            reports_menu(ctx)

        elif choice == "9":
            ctx = delete_all_menu(ctx)

        elif choice in {"q", "x"}:
            return ctx
        else:
            print("❓ Not a choice. Try again.")


def main():

    configure_logging()
    print(f"\n🏃 Trackmark CLI v{VERSION}")
    print("Your running & cycling log\n")

    data = bootstrap_defaults_interactive()             # Get saved tz, home position, etc.

    conn = connect_db(resolve_db_path(data))          # Open db
    try:
        metrics = build_metrics()
        ctx = bootstrap_context_core(
            conn, data,
            list_renderer=PrintListRenderer(metrics),
            marker_renderer=PrintMarkerRenderer(),
            position_provider=PromptPositionProvider(parse_home_position(data.get("HOME_POSITION"))),
        )
        print(f"🧠 {len(ctx.collection)} workouts loaded | 🌍 {ctx.tz_str}")
        launcher_menu(ctx)                              # Pass the context along the menus

    finally:
        conn.close()                                    # Close the connection

if __name__ == "__main__":
    main()
