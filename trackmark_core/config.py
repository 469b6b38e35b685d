from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent  # goes from trackmark_core/ up to project root
DB_PATH = BASE_DIR / "trackmark_data.db"
LOG_PATH = BASE_DIR / "trackmark.log"

# Single durable key that holds the serialized workout list
STORE_KEY = "workouts"

# Half-width (in degrees) of the map window drawn around the home position
MAP_ZOOM_DEG = 0.05
