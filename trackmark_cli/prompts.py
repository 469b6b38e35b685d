from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from trackmark_core.date_utilities import local_zone_name
from trackmark_core.errors import ValidationError
from trackmark_core.user_settings import get_saved_timezone, set_saved_timezone
from trackmark_core.validators import parse_number
from trackmark_core.workouts import Kind

YES = {"y", "yes"}
NO = {"n", "no"}


def ensure_default_timezone() -> str | None:
    """ Saved timezone, or ask once and save it. Empty input keeps following the system zone (None). """
    saved = get_saved_timezone()
    if saved:
        return saved

    system = local_zone_name()
    while True:
        entered = input(f"🌍 Timezone for workout dates (e.g. Europe/Lisbon, empty = system {system}): ").strip()
        if not entered:
            return None
        try:
            ZoneInfo(entered)
        except (ZoneInfoNotFoundError, ValueError):
            print("❌ Unknown timezone. Try again (e.g. Europe/Lisbon).")
            continue
        set_saved_timezone(entered)
        return entered


def prompt_kind() -> Kind | None:
    """ Running or cycling, None to abort """
    for i, kind in enumerate(Kind, start=1):
        print(f"  [{i}] {kind.icon} {kind.display}")
    choice = input("Choose 1 or 2: ").strip()
    kinds = list(Kind)
    if choice in {"1", "2"}:
        return kinds[int(choice) - 1]
    print("❓ Invalid choice. Exiting to main menu...")
    return None


def read_number(prompt: str, default: float | None = None) -> float:
    """ Read one number, empty input keeps default. Raises ValidationError on anything else. """
    suffix = f" [{default:g}]" if default is not None else ""
    raw = input(f"{prompt}{suffix}: ").strip()
    if not raw:
        if default is None:
            raise ValidationError()
        return default
    return parse_number(raw)


def prompt_yes_no(question: str, default: bool = True) -> bool:
    """ Ask until the answer is yes or no, empty input means default """
    hint = "Y/n" if default else "y/N"
    while True:
        answer = input(f"{question} [{hint}]: ").strip().lower()
        if not answer:
            return default
        if answer in YES or answer in NO:
            return answer in YES
        print("⚠️ Invalid input. Please enter Y or N.")
