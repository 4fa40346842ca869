"""
core.py: The digest pipeline.

    cache hit  -> return cached digest
    cache miss -> load config -> authenticate -> fetch -> merge -> render
               -> write cache (best effort) -> return digest
"""
from datetime import datetime
from typing import Callable, Optional

from config.calendar_config import DigestSettings, SourceConfig, load_source_config
from utils.cache import DigestCache
from utils.logging import logger
from utils.message_formatter import render_digest
from .events.event_fetching import fetch_events
from .events.google_api import build_calendar_service
from .events.merging import merge_events
from .events.models import FetchWindow


class DigestRunner:
    """Runs one digest invocation. Collaborators are injectable for tests."""

    def __init__(
        self,
        settings: DigestSettings,
        cache: Optional[DigestCache] = None,
        clock: Optional[Callable[[], datetime]] = None,
        config_loader: Callable[[str], SourceConfig] = load_source_config,
        service_factory: Callable[[SourceConfig, DigestSettings], object] = build_calendar_service,
    ):
        self.settings = settings
        self.clock = clock or (lambda: datetime.now(settings.timezone))
        self.cache = cache or DigestCache(settings.cache_dir, settings.timezone, self.clock)
        self.config_loader = config_loader
        self.service_factory = service_factory

    def run(self, config_path: str) -> str:
        """
        Produce the digest text.

        Raises:
            ConfigError: configuration unreadable or incomplete
            AuthError: the authenticated transport could not be built
        """
        tz = self.settings.timezone
        now = self.clock()

        cached = self.cache.read(now)
        if cached is not None:
            logger.debug("Serving digest from cache")
            return cached

        source_config = self.config_loader(config_path)
        service = self.service_factory(source_config, self.settings)

        window = FetchWindow.for_day(now.astimezone(tz).date(), tz, self.settings.lookahead_days)
        events = fetch_events(service, source_config.calendar_ids, window)
        merged = merge_events(events, tz, self.settings.invalid_start_policy)
        digest = render_digest(merged, now, tz)

        if not self.cache.write(digest, now):
            logger.debug("Digest not cached, continuing")
        logger.info(f"Digest built with {len(merged)} events from {len(source_config.calendar_ids)} calendar(s)")
        return digest
