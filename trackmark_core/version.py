import logging
import subprocess
from trackmark_core.config import BASE_DIR


logger = logging.getLogger(__name__)


def get_git_version(default="0.1.0"):
    """ Gets git version and returns it to the caller """
    try:
        version = subprocess.check_output(
            ["git", "describe", "--tags", "--abbrev=0"],
            cwd=BASE_DIR,
            stderr=subprocess.DEVNULL       # hide git error messages
        )

        return version.decode("utf-8").strip()
    except (subprocess.CalledProcessError, FileNotFoundError, OSError) as e:
        logger.debug("Could not determine git version: %s", e)
        return default
