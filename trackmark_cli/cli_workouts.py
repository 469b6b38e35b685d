from trackmark_cli.prompts import prompt_kind, prompt_yes_no, read_number
from trackmark_core.errors import PositionUnavailableError, ValidationError
from trackmark_core.runtime_context import AppContext
from trackmark_core.sorting import SortMode
from trackmark_core.usecases import (new_workout, update_workout, delete_workout, delete_all_workouts,
                                     focus_workout, sort_workouts)
from trackmark_core.workouts import Kind

EXTRA_PROMPTS = {
    Kind.RUNNING: "🦶 Cadence (spm)",
    Kind.CYCLING: "⛰ Elevation gain (m)",
}

SORT_LABELS = {
    SortMode.UNSORTED: "original order",
    SortMode.CYCLING_FIRST: "cycling first",
    SortMode.RUNNING_FIRST: "running first",
}


def view_workouts(ctx: AppContext) -> None:
    """ Print the list in its current render order """
    print(f"\n📋 Workouts ({SORT_LABELS[ctx.sorter.mode]})")
    ctx.list_renderer.show()


def choose_workout(ctx: AppContext, action: str) -> str | None:
    """ Show the list and ask for a workout id """
    view_workouts(ctx)
    if not len(ctx.collection):
        return None
    workout_id = input(f"🔎 Workout ID to {action} (empty to cancel): ").strip()
    if not workout_id:
        return None
    if workout_id not in ctx.collection:
        print("❓ Not a workout ID. Exiting to main menu...")
        return None
    return workout_id


def add_workout_menu(ctx: AppContext) -> bool:
    """ Ask kind, position and measurements and add the workout """
    print("\nWhat did you do?")
    kind = prompt_kind()
    if kind is None:
        return False

    try:
        distance = read_number("📏 Distance (km)")
        duration = read_number("⏱ Duration (min)")
        extra = read_number(EXTRA_PROMPTS[kind])
        workout = new_workout(ctx, kind, distance, duration, extra)
    except ValidationError as e:
        print(f"⚠️ {e}")
        return False
    except PositionUnavailableError as e:
        print(f"📍 {e}")
        return False

    metric = ctx.metrics[workout.metric_key]
    print(f"✅ {workout.label} ➜ {metric['label']}: {metric['formatter'](workout.metric)} {metric['unit']}")
    return True


def edit_workout_menu(ctx: AppContext) -> bool:
    """ New distance, duration and kind-specific value for one workout, empty input keeps the value """
    workout_id = choose_workout(ctx, "edit")
    if workout_id is None:
        return False
    current = ctx.collection.find_by_id(workout_id)
    kind = current.kind

    try:
        distance = read_number("📏 Distance (km)", current.distance_km)
        duration = read_number("⏱ Duration (min)", current.duration_min)
        extra = read_number(EXTRA_PROMPTS[kind], current.extra)
        updated = update_workout(ctx, workout_id, distance, duration, extra)
    except ValidationError as e:
        print(f"⚠️ {e}")
        return False

    if updated is None:
        return False
    metric = ctx.metrics[updated.metric_key]
    print(f"✏️ Saved {updated.label} ➜ {metric['label']}: {metric['formatter'](updated.metric)} {metric['unit']}")
    return True


def delete_workout_menu(ctx: AppContext) -> bool:
    workout_id = choose_workout(ctx, "delete")
    if workout_id is None:
        return False
    removed = delete_workout(ctx, workout_id)
    if removed is not None:
        print(f"🗑️ Deleted {removed.label}")
    return removed is not None


def focus_workout_menu(ctx: AppContext) -> None:
    workout_id = choose_workout(ctx, "show on the map")
    if workout_id is None:
        return
    focus_workout(ctx, workout_id)


def view_map(ctx: AppContext) -> None:
    print("\n🗺️ Markers")
    ctx.marker_renderer.show()


def sort_menu(ctx: AppContext) -> None:
    mode = sort_workouts(ctx)
    print(f"↕️ Sorted: {SORT_LABELS[mode]}")
    view_workouts(ctx)


def delete_all_menu(ctx: AppContext) -> AppContext:
    """ Confirm, wipe and reload, returns the context to continue with """
    if not prompt_yes_no("⚠️ Are you sure you want to delete all workouts?", default=False):
        print("❌ Aborted.")
        return ctx
    new_ctx = delete_all_workouts(ctx)
    print("✅ All workouts deleted.\n")
    return new_ctx
