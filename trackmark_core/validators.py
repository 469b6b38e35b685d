import math
from trackmark_core.errors import ValidationError
from trackmark_core.workouts import Kind, Position


def valid_inputs(*inputs) -> bool:
    """ Every input is a finite number """
    return all(isinstance(x, (int, float)) and not isinstance(x, bool) and math.isfinite(x) for x in inputs)


def all_positive(*inputs) -> bool:
    return all(x > 0 for x in inputs)


def validate_running_inputs(distance: float, duration: float, cadence: float) -> None:
    """ Running: all three values finite and positive """
    if not valid_inputs(distance, duration, cadence) or not all_positive(distance, duration, cadence):
        raise ValidationError()


def validate_cycling_inputs(distance: float, duration: float, elevation: float) -> None:
    """ Cycling: all three values finite, elevation gain may be zero or negative """
    if not valid_inputs(distance, duration, elevation) or not all_positive(distance, duration):
        raise ValidationError()


def validate_inputs(kind: Kind | str, distance: float, duration: float, extra: float) -> None:
    """ Dispatch to the rule set of the workout kind """
    if Kind(kind) is Kind.RUNNING:
        validate_running_inputs(distance, duration, extra)
    else:
        validate_cycling_inputs(distance, duration, extra)


def parse_number(raw) -> float:
    """ Text from a form field to float, anything unparseable is a ValidationError """
    try:
        return float(str(raw).strip())
    except (TypeError, ValueError):
        raise ValidationError() from None


def parse_position(raw: str) -> Position:
    """ 'lat,lng' text to a (lat, lng) tuple within the valid coordinate ranges """
    parts = [p.strip() for p in str(raw).replace(";", ",").split(",")]
    if len(parts) != 2:
        raise ValidationError("Position must be given as 'lat,lng' (e.g. 39.0,-12.0)")
    try:
        lat, lng = float(parts[0]), float(parts[1])
    except ValueError:
        raise ValidationError("Position must be given as 'lat,lng' (e.g. 39.0,-12.0)") from None
    if not valid_inputs(lat, lng) or not (-90 <= lat <= 90) or not (-180 <= lng <= 180):
        raise ValidationError("Latitude must be within ±90 and longitude within ±180")
    return lat, lng
