import pandas as pd
from trackmark_core.metrics import axis_label, build_metrics
from trackmark_core.utils_formatting import fmt_decimals, fmt_hm
from trackmark_core.workouts import Kind, Workout, WORKOUT_TYPES

LIST_HEADERS = ["ID", "Workout", "Distance (km)", "Duration (min)", "Pace / Speed", "Cadence / Elev"]


def format_workout_fields(workout: Workout, metrics: dict | None = None) -> dict[str, str]:
    """ Display value per field name, the same names the list renderer is updated with """
    metrics = metrics or build_metrics()
    return {
        "title": workout.label,
        "distance": metrics["distance"]["formatter"](workout.distance_km),
        "duration": metrics["duration"]["formatter"](workout.duration_min),
        workout.metric_key: metrics[workout.metric_key]["formatter"](workout.metric),
        workout.extra_key: metrics[workout.extra_key]["formatter"](workout.extra),
    }


def format_list_row(workout_id: str, kind: Kind, fields: dict[str, str], metrics: dict | None = None) -> list[str]:
    """ One list table row out of the rendered fields """
    metrics = metrics or build_metrics()
    cls = WORKOUT_TYPES[kind]
    metric_spec = metrics[cls.metric_key]
    extra_spec = metrics[cls.extra_key]
    return [
        workout_id,
        f"{kind.icon} {fields.get('title', '')}",
        fields.get("distance", ""),
        fields.get("duration", ""),
        f"{fields.get(cls.metric_key, '')} {metric_spec['unit']}",
        f"{fields.get(cls.extra_key, '')} {extra_spec['unit']}",
    ]


def marker_popup(kind: Kind, description: str) -> str:
    """ Popup text of a map marker """
    return f"{kind.icon} {description}"


def kind_summary_fmt(summary_raw: pd.DataFrame, metrics: dict) -> pd.DataFrame:
    """ Build a display-only per-kind table using labels from metrics. Does NOT mutate the input df. """
    out = summary_raw.copy()
    if out.empty:
        return pd.DataFrame(columns=["Type"])

    out["Type"] = out["kind"].map(lambda k: Kind(k).display)
    cols = ["Type"]

    out[metrics["workouts"]["label"]] = out["workouts"].astype(int)
    cols.append(metrics["workouts"]["label"])

    label = axis_label(metrics["distance"])
    out[label] = out["distance_km"].map(lambda v: fmt_decimals(v, 2))
    cols.append(label)

    label = axis_label(metrics["duration_hm"])
    out[label] = out["duration_min"].apply(fmt_hm)
    cols.append(label)

    # Pace only applies to running, speed only to cycling
    label = axis_label(metrics["pace_mmss"])
    out[label] = out["avg_pace"].map(lambda v: metrics["pace_mmss"]["formatter"](v) if pd.notna(v) else "–")
    cols.append(label)

    label = axis_label(metrics["speed"])
    out[label] = out["avg_speed"].map(lambda v: fmt_decimals(v) if pd.notna(v) else "–")
    cols.append(label)

    return out[cols]


def weekly_table_fmt(weekly_raw: pd.DataFrame, metrics: dict) -> pd.DataFrame:
    """ Build a display-only weekly table using labels from metrics. Does NOT mutate the input df. """
    out = weekly_raw.copy()
    if out.empty:
        return pd.DataFrame(columns=["Week Start", "Week End"])

    out["Week Start"] = out["week_start"].dt.strftime("%Y-%m-%d")
    out["Week End"] = out["week_end"].dt.strftime("%Y-%m-%d")
    cols = ["Week Start", "Week End"]

    for col, title in (("workouts", "Workouts"), ("running", "Runs"), ("cycling", "Rides")):
        out[title] = out[col].astype(int)
        cols.append(title)

    label = axis_label(metrics["distance"])
    out[label] = out["distance_km"].round(2)
    cols.append(label)

    label = axis_label(metrics["duration_hm"])
    out[label] = out["duration_min"].apply(fmt_hm)
    cols.append(label)

    return out[cols]
