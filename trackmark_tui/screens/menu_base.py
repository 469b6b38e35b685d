from typing import Iterable
from textual import events
from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, ListItem, ListView

from trackmark_cli.cli_utils import MenuItem


class MenuBase(Screen):
    """ Menu of app actions, picked by key or by selecting a row """

    CSS_PATH = "../CSS/menu_base.tcss"

    def __init__(self, title: str, items: Iterable[MenuItem]):
        super().__init__()
        self.title = title
        self.items = list(items)
        self._by_key = {item.key: item for item in self.items}

    def compose(self) -> ComposeResult:
        yield Header()
        yield ListView(*[ListItem(Label(f"[{item.key}] {item.label}")) for item in self.items], id="menu")
        yield Footer()

    def on_key(self, event: events.Key) -> None:
        item = self._by_key.get(event.key)
        if item is not None:
            event.stop()
            self._run(item)

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        index = event.list_view.index
        if index is not None and 0 <= index < len(self.items):
            self._run(self.items[index])

    def _run(self, item: MenuItem) -> None:
        # item.action names an action_* method on the app
        action = getattr(self.app, f"action_{item.action}", None)
        if action is not None:
            action()
