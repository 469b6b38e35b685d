from dataclasses import dataclass
from typing import Callable, Iterable, Sequence
import pandas as pd
from tabulate import tabulate

TABLE_FMT = "psql"


@dataclass
class MenuItem:
    """ One menu entry, shared by the CLI menus and the TUI menu screen """
    key: str                                # typed (CLI) or pressed (TUI) key
    label: str
    action: Callable[[], None] | str | None = None  # callback for the CLI, action name for the TUI


BACK = MenuItem("b", "Back")
QUIT = MenuItem("q", "Quit")


# ------------------ MENUS ---------------------------- #
def render_menu(title: str, items: Iterable[MenuItem]) -> None:
    print(f"\n=== {title} ===")
    for item in items:
        print(f"[{item.key}] {item.label}")


def prompt_menu(title: str, items: Sequence[MenuItem], with_back: bool = True, with_quit: bool = True) -> str:
    """ Loop until a listed key is typed, run its callback if it has one and return the key """
    entries = list(items)
    taken = {i.key.lower() for i in entries}
    entries += [extra for flag, extra in ((with_back, BACK), (with_quit, QUIT)) if flag and extra.key not in taken]
    by_key = {i.key.lower(): i for i in entries}

    while True:
        render_menu(title, entries)
        item = by_key.get(input("> ").strip().lower())
        if item is None:
            print("⚠️ Invalid choice. Try again.")
            continue
        if callable(item.action):
            item.action()
        return item.key


# ---------------------- PRINT TABLES ---------------------- #
def print_table(df: pd.DataFrame) -> None:
    """ Display-ready dataframe as a table, values are printed as they are """
    if df.empty:
        print("⚠️ No workouts yet.")
        return
    print(tabulate(df, headers="keys", tablefmt=TABLE_FMT, showindex=False, disable_numparse=True))


def print_list_table(rows: list[list[str]], headers: Sequence[str]) -> None:
    if not rows:
        print("⚠️ No workouts yet.")
        return
    print(tabulate(rows, headers=headers, tablefmt=TABLE_FMT, showindex=False, disable_numparse=True))
