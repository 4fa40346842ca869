# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                      CALENDAR CONFIGURATION MODULE                         ║
# ║                                                                            ║
# ║  Loads the TOML config (OAuth client, token, calendar ids) into a          ║
# ║  SourceConfig, and collects runtime settings from the environment.         ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- Imports ---
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple
from zoneinfo import ZoneInfo
import tomllib

from utils.environ import (
    DEFAULT_INVALID_START_POLICY,
    DEFAULT_LOOKAHEAD_DAYS,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TIMEZONE,
    get_default_cache_dir,
    get_int_env,
    get_str_env,
)
from utils.error_handling import ConfigError
from utils.logging import logger
from utils.timezone_utils import get_timezone

# --- Constants ---
DEFAULT_CONFIG_PATH = "config.toml"
DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"
DEFAULT_SCOPES = ("https://www.googleapis.com/auth/calendar.readonly",)
INVALID_START_POLICIES = ("drop", "first")

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ DATA STRUCTURES                                                            ║
# ╚════════════════════════════════════════════════════════════════════════════╝

@dataclass(frozen=True)
class OAuthSettings:
    client_id: str
    client_secret: str
    refresh_token: str
    access_token: Optional[str] = None
    token_uri: str = DEFAULT_TOKEN_URI
    scopes: Tuple[str, ...] = DEFAULT_SCOPES
    # Naive UTC, as google-auth expects
    expiry: Optional[datetime] = None


@dataclass(frozen=True)
class SourceConfig:
    calendar_ids: Tuple[str, ...]
    oauth: OAuthSettings


@dataclass(frozen=True)
class DigestSettings:
    """Runtime settings handed to each component instead of process globals."""
    timezone: ZoneInfo = field(default_factory=lambda: get_timezone(DEFAULT_TIMEZONE))
    cache_dir: str = field(default_factory=get_default_cache_dir)
    lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    invalid_start_policy: str = DEFAULT_INVALID_START_POLICY

    @classmethod
    def from_environ(cls) -> "DigestSettings":
        policy = get_str_env("DIGEST_INVALID_START", DEFAULT_INVALID_START_POLICY).strip().lower()
        if policy not in INVALID_START_POLICIES:
            logger.warning(f"Unknown DIGEST_INVALID_START '{policy}', using '{DEFAULT_INVALID_START_POLICY}'")
            policy = DEFAULT_INVALID_START_POLICY
        # httplib2 treats 0 as non-blocking and rejects negative values
        timeout = get_int_env("GOOGLE_API_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)
        if timeout < 1:
            logger.warning(f"GOOGLE_API_TIMEOUT must be positive, using {DEFAULT_REQUEST_TIMEOUT}s")
            timeout = DEFAULT_REQUEST_TIMEOUT
        return cls(
            timezone=get_timezone(get_str_env("DIGEST_TIMEZONE", DEFAULT_TIMEZONE)),
            cache_dir=get_default_cache_dir(),
            lookahead_days=max(1, get_int_env("DIGEST_LOOKAHEAD_DAYS", DEFAULT_LOOKAHEAD_DAYS)),
            request_timeout=timeout,
            invalid_start_policy=policy,
        )

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ LOADING                                                                    ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- _normalize_key ---
# "client_id", "ClientID" and "clientid" all name the same field.
def _normalize_key(key: str) -> str:
    return key.replace("_", "").replace("-", "").lower()


def _lookup(table: Dict[str, Any], *names: str, default: Any = None) -> Any:
    wanted = {_normalize_key(n) for n in names}
    for key, value in table.items():
        if _normalize_key(key) in wanted:
            return value
    return default


def _require_str(table: Dict[str, Any], section: str, *names: str) -> str:
    value = _lookup(table, *names)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"Missing or empty '{names[0]}' in [{section}]")
    return value.strip()


def _parse_expiry(value: Any) -> Optional[datetime]:
    if value in (None, ""):
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ConfigError(f"Invalid token expiry: {value!r}")
    if not isinstance(value, datetime):
        raise ConfigError(f"Invalid token expiry: {value!r}")
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value

# --- _string_list ---
# A single string or an array of strings, as a tuple with blanks removed.
# Raises: ConfigError for any other type.
def _string_list(value: Any, section: str, name: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{name}' in [{section}] must be a string or an array of strings")
    return tuple(v.strip() for v in value if v.strip())

# --- parse_source_config ---
# Builds a SourceConfig from an already-decoded TOML document.
# Raises: ConfigError when a required field is missing or malformed.
def parse_source_config(data: Dict[str, Any]) -> SourceConfig:
    client = _lookup(data, "client", "OAuthClient", default={})
    token = _lookup(data, "token", "OAuthToken", default={})
    calendar = _lookup(data, "calendar", default={})
    if not isinstance(client, dict) or not isinstance(token, dict) or not isinstance(calendar, dict):
        raise ConfigError("[client], [token] and [calendar] must be tables")

    endpoint = _lookup(client, "endpoint", default={})
    token_uri = _lookup(client, "token_uri") or (
        _lookup(endpoint, "token_url") if isinstance(endpoint, dict) else None
    ) or DEFAULT_TOKEN_URI
    scopes = _string_list(_lookup(client, "scopes"), "client", "scopes") or DEFAULT_SCOPES

    oauth = OAuthSettings(
        client_id=_require_str(client, "client", "client_id"),
        client_secret=_require_str(client, "client", "client_secret"),
        refresh_token=_require_str(token, "token", "refresh_token"),
        access_token=_lookup(token, "access_token") or None,
        token_uri=token_uri,
        scopes=scopes,
        expiry=_parse_expiry(_lookup(token, "expiry")),
    )

    calendar_ids = _string_list(_lookup(calendar, "ids"), "calendar", "ids")
    if not calendar_ids:
        raise ConfigError("No calendar ids configured in [calendar] ids")

    return SourceConfig(calendar_ids=calendar_ids, oauth=oauth)

# --- load_source_config ---
# Reads and parses the TOML configuration file.
# Raises: ConfigError if the file is unreadable, not valid TOML, or incomplete.
def load_source_config(path: str = DEFAULT_CONFIG_PATH) -> SourceConfig:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Cannot parse config file {path}: {e}") from e
    config = parse_source_config(data)
    logger.debug(f"Loaded config from {path} with {len(config.calendar_ids)} calendar(s)")
    return config
