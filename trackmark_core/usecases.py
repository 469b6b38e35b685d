import logging
import sqlite3
from trackmark_core.bootstrap import rebuild_context
from trackmark_core.runtime_context import AppContext
from trackmark_core.sorting import SortMode
from trackmark_core.table_formatters import format_workout_fields
from trackmark_core.validators import validate_inputs
from trackmark_core.workouts import Kind, Position, Workout, create_workout, make_workout_id


def _unique_id(ctx: AppContext, candidate: str) -> str:
    """ Bump the time derived id until no workout in the collection uses it """
    while candidate in ctx.collection:
        candidate = str(int(candidate) + 1)[-10:].zfill(10)
    return candidate


def _persist(ctx: AppContext) -> None:
    """ Best effort save, a failed write is logged and the session goes on """
    try:
        ctx.store.save(ctx.collection)
    except sqlite3.Error as e:
        logging.error(f"❌ Could not save workouts: {e}")


def new_workout(ctx: AppContext, kind: Kind | str, distance: float, duration: float, extra: float,
                position: Position | None = None) -> Workout:
    """ Validate, create, append, draw marker and row, save. Returns the new workout.
        Raises ValidationError or PositionUnavailableError with nothing changed. """
    kind = Kind(kind)
    validate_inputs(kind, distance, duration, extra)
    if position is None:
        position = ctx.position_provider.get_position()

    now = ctx.now()
    workout = create_workout(kind, position, distance, duration, extra,
                             workout_id=_unique_id(ctx, make_workout_id(now)), created_at=now)

    ctx.collection.append(workout)
    ctx.marker_renderer.add_marker(workout.position, workout.kind, workout.label)
    ctx.list_renderer.render(workout)
    ctx.sorter.track(workout.id)
    _persist(ctx)

    logging.info(f"✅ Added {workout.label} [{workout.id}]")
    return workout


def update_workout(ctx: AppContext, workout_id: str, distance: float, duration: float,
                   extra: float) -> Workout | None:
    """ Replace a workout by a new one of the same kind with new measured fields.
        Unknown ids are a silent no-op (None). Raises ValidationError with nothing changed. """
    old = ctx.collection.find_by_id(workout_id)
    if old is None:
        logging.debug(f"Update skipped, no workout {workout_id}")
        return None

    validate_inputs(old.kind, distance, duration, extra)
    updated = old.with_measurements(distance, duration, extra)

    ctx.collection.replace_at(workout_id, updated)
    for field, value in format_workout_fields(updated, ctx.metrics).items():
        ctx.list_renderer.update_field(workout_id, field, value)
    _persist(ctx)

    logging.info(f"✏️ Updated {updated.label} [{workout_id}] {updated.metric_key}={updated.metric:.2f}")
    return updated


def delete_workout(ctx: AppContext, workout_id: str) -> Workout | None:
    """ Remove a workout from the collection, the list, the map and the store.
        Unknown ids are a silent no-op (None). """
    removed = ctx.collection.remove_by_id(workout_id)
    if removed is None:
        logging.debug(f"Delete skipped, no workout {workout_id}")
        return None

    ctx.list_renderer.remove(workout_id)
    ctx.marker_renderer.remove_marker(removed.position, removed.label)
    ctx.sorter.forget(workout_id)
    try:
        ctx.store.remove_one(workout_id)
    except sqlite3.Error as e:
        logging.error(f"❌ Could not remove workout {workout_id} from storage: {e}")

    logging.info(f"🗑️ Deleted {removed.label} [{workout_id}]")
    return removed


def delete_all_workouts(ctx: AppContext) -> AppContext:
    """ Clear storage, then rebuild the whole session from empty. Callers must switch to the returned context. """
    ctx.store.clear()
    logging.info("🧹 All workouts deleted, reloading.")
    return rebuild_context(ctx)


def focus_workout(ctx: AppContext, workout_id: str) -> Workout | None:
    """ Marker interaction: count it and move the map to the workout """
    workout = ctx.collection.find_by_id(workout_id)
    if workout is None:
        return None
    workout.click()
    ctx.marker_renderer.focus(workout.position)
    return workout


def sort_workouts(ctx: AppContext) -> SortMode:
    """ Cycle the list order, the collection order stays as it is """
    view = [w for w in (ctx.collection.find_by_id(wid) for wid in ctx.list_renderer.order()) if w is not None]
    ordered = ctx.sorter.cycle(view)
    ctx.list_renderer.reorder([w.id for w in ordered])
    logging.debug(f"↕️ Sort mode: {ctx.sorter.mode.value}")
    return ctx.sorter.mode
