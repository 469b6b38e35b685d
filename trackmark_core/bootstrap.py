import logging
from datetime import datetime
from pathlib import Path
from typing import Callable
from zoneinfo import ZoneInfo
from trackmark_core.config import DB_PATH
from trackmark_core.date_utilities import resolve_tz
from trackmark_core.db_schema import init_db
from trackmark_core.metrics import build_metrics
from trackmark_core.renderers import (FixedPositionProvider, InMemoryListRenderer, InMemoryMarkerRenderer,
                                      ListRenderer, MarkerRenderer, PositionProvider)
from trackmark_core.runtime_context import AppContext
from trackmark_core.sorting import SortEngine
from trackmark_core.storage import WorkoutStore
from trackmark_core.user_settings import parse_home_position


def resolve_db_path(data: dict) -> Path:
    """ DB_PATH from settings if given, else the project default """
    raw = data.get("DB_PATH")
    return Path(raw).expanduser() if raw else DB_PATH


def core_resolve_timezone(tz_str: str | None) -> tuple[str, ZoneInfo]:
    """Pure, no prompts. Unknown or missing zones fall back to the system zone."""
    tzinfo = resolve_tz(tz_str)
    return tzinfo.key, tzinfo


def render_all(ctx: AppContext) -> None:
    """ Draw every loaded workout as a list row and a map marker """
    for workout in ctx.collection:
        ctx.list_renderer.render(workout)
        ctx.marker_renderer.add_marker(workout.position, workout.kind, workout.label)


def bootstrap_context_core(
    conn,
    data: dict,
    *,
    list_renderer: ListRenderer | None = None,
    marker_renderer: MarkerRenderer | None = None,
    position_provider: PositionProvider | None = None,
    clock: Callable[[], datetime] | None = None,
) -> AppContext:
    """
    Pure bootstrap:
    - resolve timezone and home position (no prompts)
    - ensure schema, load the persisted workouts
    - render them and capture the sort baseline once
    - return the application context
    """
    tz_str, tzinfo = core_resolve_timezone(data.get("TIMEZONE"))
    home = parse_home_position(data.get("HOME_POSITION"))

    init_db(conn)
    store = WorkoutStore(conn, tz=tzinfo)
    collection = store.load()
    metrics = build_metrics()

    ctx = AppContext(
        conn=conn,
        tz_str=tz_str,
        tzinfo=tzinfo,
        collection=collection,
        store=store,
        sorter=SortEngine(),
        list_renderer=list_renderer if list_renderer is not None else InMemoryListRenderer(metrics),
        marker_renderer=marker_renderer if marker_renderer is not None else InMemoryMarkerRenderer(),
        position_provider=position_provider if position_provider is not None else FixedPositionProvider(home),
        metrics=metrics,
        home_position=home,
        db_path=resolve_db_path(data),
        clock=clock,
    )

    render_all(ctx)
    ctx.sorter.capture_baseline(ctx.list_renderer.order())
    logging.debug(f"🧠 Context ready ➜ {len(collection)} workouts | 🌍 {tz_str}")
    return ctx


def rebuild_context(ctx: AppContext) -> AppContext:
    """ Throw away all session state and bootstrap again from what is persisted """
    ctx.list_renderer.clear()
    ctx.marker_renderer.clear()
    data = {"TIMEZONE": ctx.tz_str, "HOME_POSITION": ctx.home_position}
    if ctx.db_path is not None:
        data["DB_PATH"] = str(ctx.db_path)
    return bootstrap_context_core(
        ctx.conn,
        data,
        list_renderer=ctx.list_renderer,
        marker_renderer=ctx.marker_renderer,
        position_provider=ctx.position_provider,
        clock=ctx.clock,
    )
