"""Tests for the workout model, derived metrics and record reconstruction."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from trackmark_core.metrics import calc_pace, calc_speed
from trackmark_core.workouts import (
    Cycling,
    Kind,
    Running,
    create_cycling,
    create_running,
    create_workout,
    make_workout_id,
    workout_from_record,
    workout_to_record,
)

LISBON = ZoneInfo("Europe/Lisbon")


@pytest.mark.parametrize("distance, duration", [(5.2, 24), (1, 1), (42.195, 180.5), (0.4, 2)])
def test_calc_pace_and_speed_are_exact(distance, duration):
    assert calc_pace(distance, duration) == duration / distance
    assert calc_speed(distance, duration) == distance / (duration / 60)


def test_running_scenario(run1):
    assert isinstance(run1, Running)
    assert run1.kind is Kind.RUNNING
    assert run1.position == (39.0, -12.0)
    assert run1.pace == pytest.approx(4.615384615)
    assert run1.metric == run1.pace
    assert run1.extra == 178
    assert run1.label == "Running on April 14"


def test_cycling_scenario(cycling1):
    assert isinstance(cycling1, Cycling)
    assert cycling1.speed == pytest.approx(17.0526, abs=1e-4)
    assert cycling1.metric == cycling1.speed
    assert cycling1.elevation_gain_m == 523
    assert cycling1.label == "Cycling on April 14"


def test_metric_follows_measured_fields(run1):
    run1.distance_km = 10
    assert run1.pace == pytest.approx(2.4)


def test_default_id_and_date_come_from_the_clock():
    workout = create_running((1, 2), 3, 15, 170)
    assert workout.created_at.tzinfo is not None
    assert workout.id == make_workout_id(workout.created_at)
    assert len(workout.id) == 10


def test_make_workout_id_keeps_last_ten_digits():
    now = datetime(2024, 4, 14, 8, 30, tzinfo=timezone.utc)
    millis = str(int(now.timestamp() * 1000))
    assert make_workout_id(now) == millis[-10:]


def test_create_workout_rejects_unknown_kind():
    with pytest.raises(ValueError):
        create_workout("swimming", (0, 0), 1, 1, 1)


def test_click_counts_interactions(run1):
    assert run1.interaction_count == 0
    run1.click()
    assert run1.click() == 2


def test_with_measurements_keeps_identity(run1):
    run1.click()
    edited = run1.with_measurements(10, 24, 180)

    assert edited is not run1
    assert isinstance(edited, Running)
    assert (edited.id, edited.created_at, edited.position) == (run1.id, run1.created_at, run1.position)
    assert edited.interaction_count == 1
    assert edited.cadence_spm == 180
    assert edited.pace == pytest.approx(2.4)
    # the original stays untouched
    assert run1.distance_km == 5.2


def test_record_holds_measured_fields_only(run1):
    record = workout_to_record(run1)
    assert record == {
        "id": "1000000001",
        "date": run1.created_at.isoformat(),
        "type": "running",
        "coords": [39.0, -12.0],
        "distance": 5.2,
        "duration": 24.0,
        "clicks": 0,
        "cadence": 178.0,
    }


def test_reconstruction_recomputes_derived_values(cycling1):
    rebuilt = workout_from_record(workout_to_record(cycling1))
    assert isinstance(rebuilt, Cycling)
    assert rebuilt == cycling1
    assert rebuilt.speed == pytest.approx(cycling1.speed)
    assert rebuilt.label == cycling1.label


def test_reconstruction_from_browser_style_record():
    record = {
        "date": "2024-04-14T08:30:00.000Z",
        "id": "3090081234",
        "clicks": 3,
        "coords": [38.7, -9.1],
        "distance": 5.2,
        "duration": 24,
        "type": "running",
        "cadence": 178,
        "pace": 99,
        "description": "stale text",
    }
    workout = workout_from_record(record, tz=LISBON)

    assert isinstance(workout, Running)
    assert workout.interaction_count == 3
    assert workout.created_at.utcoffset().total_seconds() == 3600
    assert workout.pace == pytest.approx(24 / 5.2)
    assert workout.label == "Running on April 14"


def test_reconstruction_without_clicks_defaults_to_zero(run1):
    record = workout_to_record(run1)
    del record["clicks"]
    assert workout_from_record(record).interaction_count == 0


def test_reconstruction_rejects_unknown_type(run1):
    record = {**workout_to_record(run1), "type": "rowing"}
    with pytest.raises(ValueError):
        workout_from_record(record)


def test_reconstruction_rejects_missing_kind_field(run1):
    record = workout_to_record(run1)
    del record["cadence"]
    with pytest.raises(KeyError):
        workout_from_record(record)


def test_base_workout_cannot_be_instantiated(created_at):
    from trackmark_core.workouts import Workout

    with pytest.raises(TypeError):
        Workout(id="1", created_at=created_at, position=(0, 0), distance_km=1, duration_min=1)
