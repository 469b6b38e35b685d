import json
import logging
from trackmark_core.collection import WorkoutCollection
from trackmark_core.config import STORE_KEY
from trackmark_core.db_schema import get_value, set_value, delete_value
from trackmark_core.workouts import workout_from_record, workout_to_record


class WorkoutStore:
    """ Persists the whole ordered workout list as one JSON array under a single key """

    def __init__(self, conn, key: str = STORE_KEY, tz=None):
        self.conn = conn
        self.key = key
        self.tz = tz

    def save(self, collection: WorkoutCollection) -> None:
        """ Serialize every workout, in order, and overwrite the stored array """
        records = [workout_to_record(w) for w in collection]
        set_value(self.conn, self.key, json.dumps(records))
        logging.debug(f"💾 Saved {len(records)} workouts under '{self.key}'")

    def load_raw(self) -> list[dict]:
        """ Stored records as plain dicts, anything missing or unreadable is an empty list """
        raw = get_value(self.conn, self.key)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logging.warning(f"⚠️ Could not parse stored '{self.key}'. Using empty list.")
            return []
        if not isinstance(data, list):
            logging.warning(f"⚠️ Stored '{self.key}' is not a list. Using empty list.")
            return []
        return [rec for rec in data if isinstance(rec, dict)]

    def load(self) -> WorkoutCollection:
        """ Rehydrate live workouts, malformed records are skipped """
        workouts = []
        for rec in self.load_raw():
            try:
                workouts.append(workout_from_record(rec, tz=self.tz))
            except (KeyError, ValueError, TypeError) as e:
                logging.warning(f"⚠️ Skipping malformed workout record {rec.get('id')!r}: {e}")
        logging.debug(f"📂 Loaded {len(workouts)} workouts from '{self.key}'")
        return WorkoutCollection(workouts)

    def remove_one(self, workout_id: str) -> None:
        """ Read, filter out the id, write back the remainder """
        records = self.load_raw()
        remaining = [rec for rec in records if str(rec.get("id")) != workout_id]
        set_value(self.conn, self.key, json.dumps(remaining))
        logging.debug(f"🗑️ Removed {len(records) - len(remaining)} stored record(s) with id {workout_id}")

    def clear(self) -> None:
        delete_value(self.conn, self.key)
