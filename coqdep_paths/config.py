"""Centralized configuration for coqdep-paths.

Settings come from the environment, optionally seeded from a .env file
found upward from the package. The file is loaded once, lazily.
"""

import os
from pathlib import Path

from dotenv import load_dotenv


TRUE_VALUES = {"1", "true", "yes", "on"}

DEFAULT_LOG_LEVEL = "WARNING"


def _find_project_root() -> Path:
    """Locate the directory whose .env seeds COQDEP_* settings.

    The nearest .env at or above the installed package wins, looking at
    most four levels up. Without one, the checkout holding coqdep_paths
    is used, so a fresh clone still resolves to a sensible place.
    """
    package_dir = Path(__file__).resolve().parent
    for candidate in [package_dir, *package_dir.parents][:5]:
        if (candidate / ".env").is_file():
            return candidate
    return package_dir.parent


_ENV_LOADED = False


def _load_config():
    """Load the .env file into the environment (once)."""
    global _ENV_LOADED
    if _ENV_LOADED:
        return

    env_path = _find_project_root() / ".env"
    if env_path.exists():
        # Variables already set in the environment take precedence
        load_dotenv(env_path, override=False)
    else:
        load_dotenv()
    _ENV_LOADED = True


def get_boot_default() -> bool:
    """Whether bootstrap mode is on unless the command line says otherwise."""
    _load_config()
    return os.environ.get("COQDEP_BOOT", "").strip().lower() in TRUE_VALUES


def get_log_level() -> str:
    """Logging level name for diagnostics, WARNING by default."""
    _load_config()
    level = os.environ.get("COQDEP_LOG_LEVEL", "").strip().upper()
    return level or DEFAULT_LOG_LEVEL
