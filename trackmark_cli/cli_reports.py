from trackmark_cli.cli_utils import MenuItem, prompt_menu, print_table
from trackmark_core.reports import kind_summary, weekly_summary
from trackmark_core.runtime_context import AppContext
from trackmark_core.table_formatters import kind_summary_fmt, weekly_table_fmt


def reports_menu(ctx: AppContext) -> None:
    """ Summary reports over all workouts """
    items = [
        MenuItem("1", "Totals by type"),
        MenuItem("2", "Weekly totals"),
    ]

    while True:
        choice = prompt_menu("Reports", items)

        if choice == "1":
            df = kind_summary(ctx.collection)
            print("\n📊 Totals by type")
            print_table(kind_summary_fmt(df, ctx.metrics))

        elif choice == "2":
            df = weekly_summary(ctx.collection, ctx.tzinfo)
            print(f"\n📅 Weekly totals ({ctx.tz_str})")
            print_table(weekly_table_fmt(df, ctx.metrics))

        elif choice == "b":
            return

        elif choice == "q":
            raise SystemExit(0)
