import logging
from typing import TypedDict, Callable, Any
from trackmark_core.utils_formatting import fmt_decimals, fmt_hm, fmt_number, fmt_pace_km


class MetricInfo(TypedDict, total=False):
    key: str
    label: str
    unit: str
    formatter: str | Callable[[Any], Any]


def calc_pace(distance_km: float, duration_min: float) -> float:
    """ Running pace in min/km """
    logging.debug("Calculating pace...")
    return duration_min / distance_km


def calc_speed(distance_km: float, duration_min: float) -> float:
    """ Cycling speed in km/h """
    logging.debug("Calculating speed...")
    return distance_km / (duration_min / 60)


# This is the dictionary from which the metrics dict will be built, it drives the list rows, reports and headers #
METRICS_SPEC: dict[str, MetricInfo] = {
    "id":            {"key": "id",               "label": "ID",                          "formatter": "id"},
    "title":         {"key": "label",            "label": "Workout",                     "formatter": "text"},
    "kind":          {"key": "kind",             "label": "Type",                        "formatter": "text"},
    "date":          {"key": "created_at",       "label": "Date",                        "formatter": "text"},
    "position":      {"key": "position",         "label": "Position",                    "formatter": "position"},
    "distance":      {"key": "distance_km",      "label": "Distance",    "unit": "km",   "formatter": "number"},
    "duration":      {"key": "duration_min",     "label": "Duration",    "unit": "min",  "formatter": "number"},
    "duration_hm":   {"key": "duration_min",     "label": "Duration",    "unit": "h:m",  "formatter": "duration"},
    "pace":          {"key": "pace",             "label": "Pace",        "unit": "min/km", "formatter": "decimal"},
    "pace_mmss":     {"key": "pace",             "label": "Avg Pace",    "unit": "min/km", "formatter": "pace"},
    "speed":         {"key": "speed",            "label": "Speed",       "unit": "km/h", "formatter": "decimal"},
    "cadence":       {"key": "cadence_spm",      "label": "Cadence",     "unit": "spm",  "formatter": "number"},
    "elevationGain": {"key": "elevation_gain_m", "label": "Elev Gain",   "unit": "m",    "formatter": "number"},
    "clicks":        {"key": "interaction_count", "label": "Clicks",                     "formatter": "int"},
    "workouts":      {"key": "workouts",         "label": "Workouts",                    "formatter": "int"},
}


def fmt_position(position) -> str:
    lat, lng = position
    return f"{lat:.4f}, {lng:.4f}"


def build_metrics() -> dict:
    """ Builds a dictionary based on the METRICS_SPEC registry """
    reg = {"id": str, "text": str, "int": int,
           "position": fmt_position, "number": fmt_number,
           "decimal": fmt_decimals, "duration": fmt_hm, "pace": fmt_pace_km}
    return {k: {**spec, "formatter": reg[spec["formatter"]]} for k, spec in METRICS_SPEC.items()}


def axis_label(metric: dict) -> str:
    """Return label with unit if available."""
    unit = metric.get("unit")
    return f"{metric['label']} ({unit})" if unit else metric["label"]
