"""
Test suite for the hourly digest file cache.
"""
import os
from datetime import datetime, timedelta, timezone

from utils.cache import DigestCache


def test_missing_entry_reads_as_absent(tmp_path, tz, now):
    cache = DigestCache(str(tmp_path), tz)
    assert cache.read(now) is None


def test_bucket_key_is_hour_in_cache_timezone(tmp_path, tz, now):
    cache = DigestCache(str(tmp_path), tz)
    assert cache.bucket_key(now) == "2024031410"
    # Same instant expressed in UTC maps to the same local bucket
    assert cache.bucket_key(now.astimezone(timezone.utc)) == "2024031410"
    assert cache.path_for(now) == os.path.join(str(tmp_path), "gcal.events2024031410")


def test_bucket_key_stable_within_hour_and_changes_at_boundary(tmp_path, tz):
    cache = DigestCache(str(tmp_path), tz)
    start = datetime(2024, 3, 14, 10, 0, 0, tzinfo=tz)
    keys = {cache.bucket_key(start + timedelta(minutes=m)) for m in range(60)}
    assert keys == {"2024031410"}
    assert cache.bucket_key(start + timedelta(hours=1)) == "2024031411"
    assert cache.bucket_key(start - timedelta(seconds=1)) == "2024031409"


def test_bucket_key_uses_injected_clock(tmp_path, tz, now):
    cache = DigestCache(str(tmp_path), tz, clock=lambda: now)
    assert cache.bucket_key() == "2024031410"


def test_write_then_read_same_hour(tmp_path, tz, now):
    cache = DigestCache(str(tmp_path), tz)
    assert cache.write("[Today, 18:30:00] Standup\n\n", now) is True
    assert cache.read(now + timedelta(minutes=59)) == "[Today, 18:30:00] Standup\n\n"
    with open(cache.path_for(now), encoding="utf-8") as f:
        assert f.read() == "[Today, 18:30:00] Standup\n\n"


def test_next_hour_misses_and_old_entry_is_left_alone(tmp_path, tz, now):
    cache = DigestCache(str(tmp_path), tz)
    cache.write("old digest", now)
    assert cache.read(now + timedelta(hours=1)) is None
    assert os.path.exists(cache.path_for(now))


def test_empty_entry_is_a_miss(tmp_path, tz, now):
    cache = DigestCache(str(tmp_path), tz)
    cache.write("", now)
    assert cache.read(now) is None


def test_write_leaves_no_temp_files(tmp_path, tz, now):
    cache = DigestCache(str(tmp_path), tz)
    cache.write("one", now)
    cache.write("two", now)
    assert os.listdir(tmp_path) == ["gcal.events2024031410"]
    assert cache.read(now) == "two"


def test_write_failure_is_not_fatal(tmp_path, tz, now):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way")
    cache = DigestCache(str(blocker / "cache"), tz)
    assert cache.write("digest", now) is False
    assert cache.read(now) is None
