import json
import logging

import pytest

from trackmark_core.bootstrap import bootstrap_context_core
from trackmark_core.collection import WorkoutCollection
from trackmark_core.db_schema import get_value, set_value
from trackmark_core.storage import WorkoutStore
from trackmark_core.workouts import Cycling, Running


@pytest.fixture
def store(conn):
    return WorkoutStore(conn)


def test_empty_store_loads_nothing(store):
    assert store.load_raw() == []
    assert len(store.load()) == 0


def test_save_then_load_keeps_order_and_variants(store, run1, cycling1):
    store.save(WorkoutCollection([run1, cycling1]))
    loaded = store.load()

    assert loaded.ids() == ["1000000001", "1000000002"]
    first, second = loaded.all()
    assert isinstance(first, Running) and isinstance(second, Cycling)
    assert first.pace == pytest.approx(run1.pace)
    assert second.speed == pytest.approx(cycling1.speed)


def test_saved_payload_is_a_json_array_of_records(store, conn, run1):
    store.save(WorkoutCollection([run1]))
    payload = json.loads(get_value(conn, "workouts"))
    assert isinstance(payload, list)
    assert payload[0]["type"] == "running"
    assert "pace" not in payload[0]


def test_save_overwrites_previous_array(store, run1, cycling1):
    store.save(WorkoutCollection([run1, cycling1]))
    store.save(WorkoutCollection([cycling1]))
    assert store.load().ids() == ["1000000002"]


def test_unparseable_payload_loads_as_empty(store, conn, caplog):
    set_value(conn, "workouts", "{not json")
    with caplog.at_level(logging.WARNING):
        assert store.load_raw() == []
    assert "Could not parse" in caplog.text


def test_non_list_payload_loads_as_empty(store, conn):
    set_value(conn, "workouts", json.dumps({"id": "1"}))
    assert store.load_raw() == []


def test_malformed_records_are_skipped(store, conn, run1, caplog):
    store.save(WorkoutCollection([run1]))
    records = json.loads(get_value(conn, "workouts"))
    records.append({"id": "9", "type": "rowing"})
    records.append("not a record")
    set_value(conn, "workouts", json.dumps(records))

    with caplog.at_level(logging.WARNING):
        loaded = store.load()

    assert loaded.ids() == ["1000000001"]
    assert "Skipping malformed workout record" in caplog.text


@pytest.mark.parametrize("changes", [
    {"distance": 0},
    {"duration": 0},
    {"distance": -5.2},
    {"duration": "NaN"},
    {"distance": "far"},
    {"cadence": float("inf")},
    {"date": 1713083400000},
    {"date": None},
    {"date": "yesterday"},
    {"coords": 39.0},
    {"coords": [39.0]},
    {"coords": ["north", "west"]},
])
def test_records_breaking_invariants_are_skipped(store, conn, run1, changes, caplog):
    store.save(WorkoutCollection([run1]))
    records = json.loads(get_value(conn, "workouts"))
    records.append({**records[0], "id": "1000000009", **changes})
    set_value(conn, "workouts", json.dumps(records))

    with caplog.at_level(logging.WARNING):
        loaded = store.load()

    assert loaded.ids() == ["1000000001"]
    assert "1000000009" in caplog.text


def test_startup_survives_a_bad_record(conn, settings, run1):
    store = WorkoutStore(conn)
    store.save(WorkoutCollection([run1]))
    records = store.load_raw()
    records.append({**records[0], "id": "1000000009", "distance": 0})
    set_value(conn, "workouts", json.dumps(records))

    ctx = bootstrap_context_core(conn, settings)

    assert ctx.collection.ids() == ["1000000001"]
    assert ctx.list_renderer.order() == ["1000000001"]


def test_remove_one_filters_only_that_id(store, run1, cycling1):
    store.save(WorkoutCollection([run1, cycling1]))
    store.remove_one("1000000001")
    assert [rec["id"] for rec in store.load_raw()] == ["1000000002"]


def test_remove_one_with_unknown_id_keeps_records(store, run1):
    store.save(WorkoutCollection([run1]))
    store.remove_one("424242")
    assert [rec["id"] for rec in store.load_raw()] == ["1000000001"]


def test_clear_removes_the_key(store, conn, run1):
    store.save(WorkoutCollection([run1]))
    store.clear()
    assert get_value(conn, "workouts") is None
    assert store.load_raw() == []


def test_keys_are_isolated(conn, run1):
    WorkoutStore(conn, key="other").save(WorkoutCollection([run1]))
    assert WorkoutStore(conn).load_raw() == []
