# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                          HOURLY DIGEST FILE CACHE                          ║
# ║   Memoizes the rendered digest in a plain-text file keyed by the current   ║
# ║   wall-clock hour. A new hour means a new file, so stale entries are       ║
# ║   simply never read again.                                                 ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# Standard library imports
import os
import tempfile
from datetime import datetime
from typing import Callable, Optional
from zoneinfo import ZoneInfo

# Local application imports
from utils.logging import logger
from utils.error_handling import with_error_handling

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ CONSTANTS                                                                  ║
# ╚════════════════════════════════════════════════════════════════════════════╝

CACHE_FILE_PREFIX = "gcal.events"
BUCKET_FORMAT = "%Y%m%d%H"
CACHE_FILE_MODE = 0o644

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ CLASS DEFINITION: DigestCache                                              ║
# ╚════════════════════════════════════════════════════════════════════════════╝

class DigestCache:
    # --- __init__ ---
    # Args:
    #     cache_dir: Directory holding one file per hour bucket.
    #     tz: Timezone whose wall-clock hour defines the bucket.
    #     clock: Returns the current aware datetime; injectable for tests.
    def __init__(self, cache_dir: str, tz: ZoneInfo,
                 clock: Optional[Callable[[], datetime]] = None):
        self.cache_dir = cache_dir
        self.tz = tz
        self.clock = clock or (lambda: datetime.now(tz))

    # --- bucket_key ---
    # Returns: "YYYYMMDDHH" for the given (or current) moment in the cache timezone.
    def bucket_key(self, now: Optional[datetime] = None) -> str:
        now = now or self.clock()
        return now.astimezone(self.tz).strftime(BUCKET_FORMAT)

    def path_for(self, now: Optional[datetime] = None) -> str:
        return os.path.join(self.cache_dir, CACHE_FILE_PREFIX + self.bucket_key(now))

    # --- read ---
    # Returns the cached digest for the current bucket.
    # Missing, unreadable, and empty files are all a plain miss (None).
    def read(self, now: Optional[datetime] = None) -> Optional[str]:
        path = self.path_for(now)
        try:
            with open(path, "r", encoding="utf-8") as f:
                digest = f.read()
        except (OSError, UnicodeDecodeError):
            logger.debug(f"Digest cache miss: {path}")
            return None
        if not digest:
            logger.debug(f"Digest cache entry is empty: {path}")
            return None
        logger.debug(f"Digest cache hit: {path}")
        return digest

    # --- write ---
    # Stores the digest for the current bucket via a temp file renamed into place,
    # so a concurrent reader sees either the old file or the complete new one.
    # Concurrent writers in the same bucket: last rename wins.
    # Returns: True on success, False if the write failed (logged, never raised).
    @with_error_handling(default_value=False, error_message="Failed to write digest cache")
    def write(self, digest: str, now: Optional[datetime] = None) -> bool:
        path = self.path_for(now)
        os.makedirs(self.cache_dir, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=CACHE_FILE_PREFIX, suffix=".tmp", dir=self.cache_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(digest)
            os.chmod(tmp_path, CACHE_FILE_MODE)
            os.replace(tmp_path, path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
        logger.debug(f"Digest cached at {path}")
        return True
