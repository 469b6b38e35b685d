import json
import logging
import os
from pathlib import Path


def resolve_config_path() -> Path:
    """
    Search order (read):
    1) TRACKMARK_CONFIG env var (if set)
    2) Project-local file next to this module
    3) Per-user file (~/.trackmark/settings.json)

    Write default:
    - If env var set -> write there
    - Else -> project-local file
    """
    env = os.getenv("TRACKMARK_CONFIG")
    if env:
        return Path(env).expanduser().resolve()

    project_local = Path(__file__).resolve().parent / "settings.json"
    if project_local.exists():
        return project_local

    user_conf = Path.home() / ".trackmark" / "settings.json"
    if user_conf.exists():
        return user_conf

    # default new writes go project-local (discoverable for users)
    return project_local

CONFIG_PATH = resolve_config_path()


def load_json(p: Path) -> dict:
    """ Loads json if it's not valid it opens as empty dict """
    if not p.exists():
        return {}
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        logging.warning(f"⚠️ Could not parse {p}. Using empty defaults.")
        return {}
    return data if isinstance(data, dict) else {}


def save_json(p: Path, data: dict):
    """Safely save dict to JSON using atomic write and folder creation."""
    p.parent.mkdir(parents=True, exist_ok=True)

    # Step 1: write to a temporary file
    tmp = p.with_suffix(p.suffix + ".tmp")
    tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")

    # Step 2: atomically replace the old file
    tmp.replace(p)


def save_settings(updates: dict, path: Path | None = None) -> None:
    """ Canonical writer for TIMEZONE / HOME_POSITION / DB_PATH """
    path = path or CONFIG_PATH
    data = load_json(path)
    for k, v in updates.items():
        if isinstance(v, Path):
            data[k] = v.expanduser().as_posix()
        elif isinstance(v, tuple):
            data[k] = list(v)
        else:
            data[k] = v
    save_json(path, data)


def get_saved_timezone(path: Path | None = None) -> str | None:
    """ Gets timezone from json file """
    return load_json(path or CONFIG_PATH).get("TIMEZONE")


def set_saved_timezone(tz: str, path: Path | None = None) -> None:
    save_settings({"TIMEZONE": tz}, path)


def parse_home_position(raw) -> tuple[float, float] | None:
    """ Home position as (lat, lng) or None when missing or malformed """
    try:
        lat, lng = raw
        return float(lat), float(lng)
    except (TypeError, ValueError):
        if raw is not None:
            logging.warning(f"⚠️ Ignoring malformed HOME_POSITION {raw!r}")
        return None


def get_saved_home_position(path: Path | None = None) -> tuple[float, float] | None:
    return parse_home_position(load_json(path or CONFIG_PATH).get("HOME_POSITION"))


def set_saved_home_position(position: tuple[float, float], path: Path | None = None) -> None:
    save_settings({"HOME_POSITION": position}, path)
