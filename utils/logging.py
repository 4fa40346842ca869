# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                        CALENDAR DIGEST LOGGING SETUP                       ║
# ║ Configures colored console output on stderr and optional rotating file     ║
# ║ logging. stdout is reserved for the digest itself.                         ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# Standard library imports
import logging
import os
import sys
from logging.handlers import TimedRotatingFileHandler

# Third-party imports
from colorlog import ColoredFormatter

# Local application imports
from utils.environ import DEBUG, DIGEST_LOG_FILE

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ LOGGER INITIALIZATION AND CONFIGURATION                                    ║
# ╚════════════════════════════════════════════════════════════════════════════╝

LOG_LEVEL = logging.DEBUG if DEBUG else logging.INFO

logger = logging.getLogger("gcaldigest")
logger.setLevel(LOG_LEVEL)
logger.propagate = False

active_log_file = None

# --- Prevent Re-initialization ---
if not getattr(logger, '_initialized', False):
    # --- Define Formatters ---
    file_formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)s in %(name)s [%(filename)s:%(lineno)d]: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    console_formatter = ColoredFormatter(
        "%(log_color)s[%(asctime)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        log_colors={
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "bold_red",
        }
    )

    # --- Setup Console Handler ---
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(LOG_LEVEL)
    logger.addHandler(console_handler)

    # --- Setup File Handler (if requested) ---
    if DIGEST_LOG_FILE:
        try:
            log_dir = os.path.dirname(os.path.abspath(DIGEST_LOG_FILE))
            os.makedirs(log_dir, exist_ok=True)
            # Daily rotation, keeps 7 backups
            file_handler = TimedRotatingFileHandler(
                DIGEST_LOG_FILE,
                when="midnight",
                interval=1,
                backupCount=7,
                encoding="utf-8",
            )
            file_handler.setFormatter(file_formatter)
            file_handler.setLevel(LOG_LEVEL)
            logger.addHandler(file_handler)
            active_log_file = DIGEST_LOG_FILE
        except OSError as e:
            logger.warning(f"File logging disabled, could not open {DIGEST_LOG_FILE}: {e}")

    logger._initialized = True
    logger.debug(f"Logging initialized (level {'DEBUG' if DEBUG else 'INFO'})")

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ UTILITY FUNCTIONS                                                          ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- get_log_file_location ---
# Returns the path to the currently active log file.
# Returns: String containing the log file path, or a message indicating console-only logging.
def get_log_file_location():
    if active_log_file:
        return active_log_file
    return "Console only (File logging disabled)"
