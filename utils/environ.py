# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                       ENVIRONMENT CONFIGURATION                            ║
# ║    Centralized access and type conversion for environment variables.       ║
# ║       Includes helpers for boolean, integer, and string values.            ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# Standard library imports
import os
import tempfile
from typing import Optional

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ HELPER FUNCTIONS                                                           ║
# ║ A variable that is unset or only whitespace counts as "not configured",    ║
# ║ so `DIGEST_LOOKAHEAD_DAYS=` in a cron line falls back to the default.      ║
# ╚════════════════════════════════════════════════════════════════════════════╝

TRUTHY_VALUES = ("1", "true", "yes", "on")


# --- _raw_env ---
# Returns: the stripped value, or None when unset or blank.
def _raw_env(var_name: str) -> Optional[str]:
    val = os.environ.get(var_name)
    if val is None or not val.strip():
        return None
    return val.strip()

# --- get_bool_env ---
# True for 1/true/yes/on in any case; default when not configured.
def get_bool_env(var_name: str, default: bool = False) -> bool:
    val = _raw_env(var_name)
    if val is None:
        return default
    return val.lower() in TRUTHY_VALUES

# --- get_int_env ---
# Integer value; default when not configured or not a number.
def get_int_env(var_name: str, default: int = 0) -> int:
    val = _raw_env(var_name)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        return default

# --- get_str_env ---
# Stripped string value; default when not configured.
def get_str_env(var_name: str, default: Optional[str] = "") -> Optional[str]:
    val = _raw_env(var_name)
    return default if val is None else val

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ CORE CONFIGURATION VARIABLES                                               ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# Debug mode flag (controls verbose logging)
DEBUG: bool = get_bool_env("DEBUG", False)

# Optional log file; console-only logging when unset
DIGEST_LOG_FILE: Optional[str] = get_str_env("DIGEST_LOG_FILE", None)

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ DIGEST DEFAULTS                                                            ║
# ║ Read at call time by DigestSettings.from_environ(), not frozen on import.  ║
# ╚════════════════════════════════════════════════════════════════════════════╝

DEFAULT_TIMEZONE = "Europe/Moscow"
DEFAULT_LOOKAHEAD_DAYS = 30
DEFAULT_REQUEST_TIMEOUT = 30
DEFAULT_INVALID_START_POLICY = "drop"


def get_default_cache_dir() -> str:
    return get_str_env("DIGEST_CACHE_DIR", "") or tempfile.gettempdir()
