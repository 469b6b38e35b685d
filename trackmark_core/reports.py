from datetime import timedelta
from typing import Iterable
import numpy as np
import pandas as pd
from trackmark_core.workouts import Kind, Workout, Running, Cycling

WORKOUT_COLUMNS = ["id", "kind", "created_at", "lat", "lng", "distance_km", "duration_min",
                   "pace", "speed", "cadence_spm", "elevation_gain_m", "interaction_count"]
KIND_SUMMARY_COLUMNS = ["kind", "workouts", "distance_km", "duration_min", "avg_pace", "avg_speed"]
WEEKLY_COLUMNS = ["week_start", "week_end", "workouts", "running", "cycling", "distance_km", "duration_min"]


def workouts_dataframe(workouts: Iterable[Workout]) -> pd.DataFrame:
    """ One row per workout with measured and derived columns """
    rows = []
    for w in workouts:
        lat, lng = w.position
        rows.append({
            "id": w.id,
            "kind": w.kind.value,
            "created_at": w.created_at,
            "lat": lat,
            "lng": lng,
            "distance_km": w.distance_km,
            "duration_min": w.duration_min,
            "pace": w.pace if isinstance(w, Running) else np.nan,
            "speed": w.speed if isinstance(w, Cycling) else np.nan,
            "cadence_spm": w.cadence_spm if isinstance(w, Running) else np.nan,
            "elevation_gain_m": w.elevation_gain_m if isinstance(w, Cycling) else np.nan,
            "interaction_count": w.interaction_count,
        })
    return pd.DataFrame(rows, columns=WORKOUT_COLUMNS)


def kind_summary(workouts: Iterable[Workout]) -> pd.DataFrame:
    """ Totals per kind, average pace for running and average speed for cycling (distance weighted) """
    df = workouts_dataframe(workouts)
    if df.empty:
        return pd.DataFrame(columns=KIND_SUMMARY_COLUMNS)

    agg = (df.groupby("kind")
             .agg(workouts=("id", "count"),
                  distance_km=("distance_km", "sum"),
                  duration_min=("duration_min", "sum"))
             .reset_index())

    dist = agg["distance_km"].replace(0, np.nan)
    hours = agg["duration_min"].replace(0, np.nan) / 60
    agg["avg_pace"] = np.where(agg["kind"] == Kind.RUNNING.value, agg["duration_min"] / dist, np.nan)
    agg["avg_speed"] = np.where(agg["kind"] == Kind.CYCLING.value, dist / hours, np.nan)

    # Running first, the same order the kinds are offered in
    order = {k.value: i for i, k in enumerate(Kind)}
    agg = agg.sort_values("kind", key=lambda s: s.map(order)).reset_index(drop=True)
    return agg[KIND_SUMMARY_COLUMNS]


def weekly_summary(workouts: Iterable[Workout], tz) -> pd.DataFrame:
    """ Monday-anchored 7-day buckets in the local timezone """
    df = workouts_dataframe(workouts)
    if df.empty:
        return pd.DataFrame(columns=WEEKLY_COLUMNS)

    # Make DateTime tz-aware & convert to local, then drop tz so day arithmetic ignores DST
    dt = pd.to_datetime(df["created_at"], utc=True, errors="coerce")
    local_day = dt.dt.tz_convert(tz).dt.tz_localize(None).dt.normalize()
    df["week_start"] = local_day - pd.to_timedelta(local_day.dt.weekday, unit="D")
    df["is_running"] = (df["kind"] == Kind.RUNNING.value).astype(int)
    df["is_cycling"] = (df["kind"] == Kind.CYCLING.value).astype(int)

    agg = (df.groupby("week_start")
             .agg(workouts=("id", "count"),
                  running=("is_running", "sum"),
                  cycling=("is_cycling", "sum"),
                  distance_km=("distance_km", "sum"),
                  duration_min=("duration_min", "sum"))
             .reset_index()
             .sort_values("week_start"))

    agg["week_end"] = agg["week_start"] + timedelta(days=6)
    return agg[WEEKLY_COLUMNS].reset_index(drop=True)
