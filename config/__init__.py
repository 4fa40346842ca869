# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                      CONFIGURATION PACKAGE INITIALIZER                     ║
# ║                                                                            ║
# ║  Centralizes configuration for the calendar digest: the TOML source        ║
# ║  config and the environment-driven runtime settings.                       ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- Exports ---
from .calendar_config import (
    DEFAULT_CONFIG_PATH,    # Constant: config file used when --config is not given
    DigestSettings,         # Runtime settings (timezone, cache dir, window, timeout)
    OAuthSettings,          # OAuth client + token material
    SourceConfig,           # Calendar ids + OAuth settings for one run
    load_source_config,     # Function to read and validate the TOML config file
    parse_source_config,    # Function to validate an already-decoded TOML document
)
