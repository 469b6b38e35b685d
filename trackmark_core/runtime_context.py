import sqlite3
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable
from zoneinfo import ZoneInfo
from trackmark_core.collection import WorkoutCollection
from trackmark_core.renderers import ListRenderer, MarkerRenderer, PositionProvider
from trackmark_core.sorting import SortEngine
from trackmark_core.storage import WorkoutStore
from trackmark_core.workouts import Position


@dataclass
class AppContext:
    """ Everything one session owns, built once by bootstrap and handed to every use case """
    conn: sqlite3.Connection
    tz_str: str
    tzinfo: ZoneInfo
    collection: WorkoutCollection
    store: WorkoutStore
    sorter: SortEngine
    list_renderer: ListRenderer
    marker_renderer: MarkerRenderer
    position_provider: PositionProvider
    metrics: dict
    home_position: Position | None = None
    db_path: Path | None = None
    clock: Callable[[], datetime] | None = field(default=None, repr=False)

    def now(self) -> datetime:
        """ Aware 'now' in the session timezone """
        if self.clock is not None:
            return self.clock()
        return datetime.now(self.tzinfo)
