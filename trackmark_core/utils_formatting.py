import math
from typing import Literal


""" fmt_pace is the core function and fmt_pace_km the wrapper used for display with the unit """
def fmt_pace_km(minutes):
    return fmt_pace(minutes, with_unit=True)

def fmt_pace(minutes: float | int | None, with_unit: bool = False) -> str:
    """ Takes pace in decimal min/km and returns it in m:ss or m:ss/km format """
    # Validate input
    try:
        mins = float(minutes)
    except (TypeError, ValueError):
        return ""
    if not math.isfinite(mins) or mins <= 0:
        return ""
    # Convert and format
    sec = int(round(mins * 60))
    m, s = divmod(sec, 60)
    return f"{m}:{s:02d}" if not with_unit else f"{m}:{s:02d}/km"


def fmt_decimals(fl_num, places: int = 1) -> str:
    """ Format decimal numbers, returns formatted string """
    try:
        num = float(fl_num)
    except (TypeError, ValueError):
        return ""
    if not math.isfinite(num):
        return ""
    return f"{num:.{places}f}"


def fmt_number(value) -> str:
    """ Whole numbers without trailing zeros, others as given e.g. 5.2 -> '5.2', 24.0 -> '24' """
    try:
        num = float(value)
    except (TypeError, ValueError):
        return ""
    if not math.isfinite(num):
        return ""
    return str(int(num)) if num.is_integer() else str(num)


""" format_minutes is the core function and fmt_hm and fmt_hms wrapper functions for picking the mode """
def fmt_hm(minutes):
    return format_minutes(minutes, "hm")

def fmt_hms(minutes):
    return format_minutes(minutes, "hms")

def format_minutes(
    minutes,
    mode: Literal["hms", "hm"] = "hm",
):
    """ Takes minutes and returns time in hms or hm format """
    # Check for undesirable values normalizing to 0
    try:
        total_min = float(minutes)
    except (TypeError, ValueError):
        total_min = 0
    if math.isnan(total_min) or total_min < 0:
        total_min = 0
    # Round to nearest second
    sec = max(0, int(round(total_min * 60)))

    # Format to time
    h, rem = divmod(sec, 3600)
    m, s = divmod(rem, 60)
    return f"{h:02}:{m:02}" if mode == "hm" else f"{h:02}:{m:02}:{s:02}"
