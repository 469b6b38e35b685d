import logging

import pytest

from trackmark_core.errors import PositionUnavailableError, ValidationError
from trackmark_core.renderers import FixedPositionProvider
from trackmark_core.sorting import SortMode
from trackmark_core.usecases import (
    delete_all_workouts,
    delete_workout,
    focus_workout,
    new_workout,
    sort_workouts,
    update_workout,
)
from trackmark_core.workouts import Cycling, Running, create_running, make_workout_id

HOME = (39.0, -12.0)


def test_new_running_workout(ctx, created_at):
    workout = new_workout(ctx, "running", 5.2, 24, 178)

    assert isinstance(workout, Running)
    assert workout.position == (39.0, -12.0)
    assert workout.id == make_workout_id(created_at)
    assert workout.label == "Running on April 14"
    assert ctx.collection.ids() == [workout.id]
    assert ctx.list_renderer.order() == [workout.id]
    assert ctx.list_renderer.rows[workout.id]["pace"] == "4.6"
    assert [m.popup for m in ctx.marker_renderer.markers_at((39.0, -12.0))] == ["🏃 Running on April 14"]
    assert [rec["id"] for rec in ctx.store.load_raw()] == [workout.id]


def test_new_workout_uses_an_explicit_position(ctx):
    workout = new_workout(ctx, "cycling", 27, 95, 523, position=(38.7, -9.1))
    assert isinstance(workout, Cycling)
    assert workout.position == (38.7, -9.1)
    assert workout.speed == pytest.approx(17.0526, abs=1e-4)


def test_new_rows_render_at_the_top(ctx):
    first = new_workout(ctx, "running", 5, 25, 170)
    second = new_workout(ctx, "cycling", 20, 60, 100, position=(39.2, -12.2))
    assert ctx.collection.ids() == [first.id, second.id]
    assert ctx.list_renderer.order() == [second.id, first.id]


def test_ids_stay_unique_under_a_fixed_clock(ctx, created_at):
    first = new_workout(ctx, "running", 5, 25, 170)
    second = new_workout(ctx, "running", 6, 30, 172, position=(39.3, -12.3))
    assert first.id == make_workout_id(created_at)
    assert second.id == str(int(first.id) + 1)


@pytest.mark.parametrize("kind, values", [
    ("running", (0, 24, 178)),
    ("running", (5.2, -1, 178)),
    ("running", (5.2, 24, 0)),
    ("running", (float("nan"), 24, 178)),
    ("cycling", (27, 0, 523)),
    ("cycling", (float("inf"), 95, 523)),
])
def test_invalid_input_changes_nothing(ctx, kind, values):
    with pytest.raises(ValidationError) as exc:
        new_workout(ctx, kind, *values)
    assert str(exc.value) == "Inputs have to be positive numbers!"
    assert len(ctx.collection) == 0
    assert ctx.list_renderer.order() == []
    assert ctx.marker_renderer.markers == []
    assert ctx.store.load_raw() == []


def test_cycling_allows_zero_or_negative_elevation(ctx):
    assert new_workout(ctx, "cycling", 10, 30, 0).elevation_gain_m == 0
    assert new_workout(ctx, "cycling", 10, 30, -40, position=(39.5, -12.5)).elevation_gain_m == -40


def test_position_unavailable_changes_nothing(ctx):
    ctx.position_provider = FixedPositionProvider(None)
    with pytest.raises(PositionUnavailableError):
        new_workout(ctx, "running", 5.2, 24, 178)
    assert len(ctx.collection) == 0
    assert ctx.store.load_raw() == []


def test_update_recomputes_metric_and_persists(ctx):
    workout = new_workout(ctx, "running", 5.2, 24, 178)
    updated = update_workout(ctx, workout.id, 10, 24, 180)

    assert updated.pace == pytest.approx(2.4)
    assert updated.id == workout.id
    assert updated.label == workout.label
    assert ctx.collection.find_by_id(workout.id) is updated

    row = ctx.list_renderer.rows[workout.id]
    assert (row["distance"], row["pace"], row["cadence"]) == ("10", "2.4", "180")

    stored = ctx.store.load_raw()[0]
    assert (stored["distance"], stored["duration"], stored["cadence"]) == (10, 24, 180)


def test_update_keeps_collection_position(ctx):
    first = new_workout(ctx, "running", 5, 25, 170)
    second = new_workout(ctx, "cycling", 20, 60, 100, position=(39.2, -12.2))
    update_workout(ctx, first.id, 6, 30, 171)
    assert ctx.collection.ids() == [first.id, second.id]
    assert [rec["id"] for rec in ctx.store.load_raw()] == [first.id, second.id]


def test_update_of_unknown_id_is_a_no_op(ctx):
    workout = new_workout(ctx, "running", 5.2, 24, 178)
    assert update_workout(ctx, "nope", 1, 1, 1) is None
    assert ctx.collection.find_by_id(workout.id) is workout


def test_invalid_update_changes_nothing(ctx):
    workout = new_workout(ctx, "running", 5.2, 24, 178)
    with pytest.raises(ValidationError):
        update_workout(ctx, workout.id, -3, 24, 178)
    assert ctx.collection.find_by_id(workout.id).distance_km == 5.2
    assert ctx.store.load_raw()[0]["distance"] == 5.2


def test_delete_removes_everywhere(ctx):
    keep = new_workout(ctx, "running", 5, 25, 170)
    gone = new_workout(ctx, "cycling", 20, 60, 100, position=(39.2, -12.2))

    removed = delete_workout(ctx, gone.id)

    assert removed is gone
    assert ctx.collection.ids() == [keep.id]
    assert ctx.list_renderer.order() == [keep.id]
    assert ctx.marker_renderer.markers_at((39.2, -12.2)) == []
    assert gone.id not in ctx.sorter.baseline
    assert [rec["id"] for rec in ctx.store.load_raw()] == [keep.id]


def test_delete_of_unknown_id_is_a_no_op(ctx):
    workout = new_workout(ctx, "running", 5, 25, 170)
    assert delete_workout(ctx, "nope") is None
    assert ctx.collection.ids() == [workout.id]
    assert [rec["id"] for rec in ctx.store.load_raw()] == [workout.id]


def test_delete_all_starts_from_empty(ctx):
    new_workout(ctx, "running", 5, 25, 170)
    new_workout(ctx, "cycling", 20, 60, 100, position=(39.2, -12.2))
    list_renderer = ctx.list_renderer

    fresh = delete_all_workouts(ctx)

    assert fresh is not ctx
    assert len(fresh.collection) == 0
    assert fresh.store.load_raw() == []
    assert fresh.list_renderer is list_renderer
    assert list_renderer.order() == []
    assert fresh.marker_renderer.markers == []
    assert fresh.sorter.mode is SortMode.UNSORTED
    assert fresh.sorter.baseline == []


def test_focus_counts_and_centers(ctx):
    workout = new_workout(ctx, "running", 5, 25, 170)
    focus_workout(ctx, workout.id)
    focus_workout(ctx, workout.id)
    assert workout.interaction_count == 2
    assert ctx.marker_renderer.focused == workout.position
    assert focus_workout(ctx, "nope") is None


def test_sort_reorders_list_only(ctx):
    run_a = new_workout(ctx, "running", 5, 25, 170)
    ride = new_workout(ctx, "cycling", 20, 60, 100, position=(39.2, -12.2))
    run_b = new_workout(ctx, "running", 6, 30, 172, position=(39.3, -12.3))
    rendered = ctx.list_renderer.order()
    assert rendered == [run_b.id, ride.id, run_a.id]

    assert sort_workouts(ctx) is SortMode.CYCLING_FIRST
    assert ctx.list_renderer.order() == [ride.id, run_b.id, run_a.id]
    assert sort_workouts(ctx) is SortMode.RUNNING_FIRST
    assert ctx.list_renderer.order() == [run_b.id, run_a.id, ride.id]
    assert sort_workouts(ctx) is SortMode.UNSORTED
    assert ctx.list_renderer.order() == rendered

    assert ctx.collection.ids() == [run_a.id, ride.id, run_b.id]


def test_session_is_restored_from_storage(ctx, conn, settings):
    from trackmark_core.bootstrap import bootstrap_context_core

    workout = new_workout(ctx, "running", 5.2, 24, 178)
    update_workout(ctx, workout.id, 10, 24, 180)

    restored = bootstrap_context_core(conn, settings)
    again = restored.collection.find_by_id(workout.id)
    assert again.pace == pytest.approx(2.4)
    assert again.label == workout.label
    assert restored.sorter.baseline == [workout.id]


def test_failed_save_is_logged_not_raised(ctx, caplog):
    workout = new_workout(ctx, "running", 5, 25, 170)
    ctx.conn.close()
    with caplog.at_level(logging.ERROR):
        updated = update_workout(ctx, workout.id, 6, 25, 170)
    assert updated.distance_km == 6
    assert "Could not save workouts" in caplog.text


def test_workouts_at_home_each_get_a_marker(ctx):
    first = new_workout(ctx, "running", 5, 25, 170)
    second = new_workout(ctx, "cycling", 20, 60, 100)
    assert first.position == second.position == HOME

    assert [m.popup for m in ctx.marker_renderer.markers_at(HOME)] == [
        "🏃 Running on April 14", "🚴 Cycling on April 14",
    ]

    delete_workout(ctx, first.id)
    assert ctx.collection.ids() == [second.id]
    assert [m.popup for m in ctx.marker_renderer.markers] == ["🚴 Cycling on April 14"]


def test_id_bump_keeps_ten_digits(ctx):
    from trackmark_core.usecases import _unique_id

    ctx.collection.append(create_running(HOME, 5, 25, 170, workout_id="9999999999"))
    assert _unique_id(ctx, "9999999999") == "0000000000"
    ctx.collection.append(create_running(HOME, 5, 25, 170, workout_id="0000000000"))
    assert _unique_id(ctx, "9999999999") == "0000000001"
