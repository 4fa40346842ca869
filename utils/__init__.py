"""
utils package: environment, logging, caching, error handling, timezone and
formatting helpers shared by the digest pipeline.

Submodules are imported directly (``from utils.cache import DigestCache``);
nothing is re-exported here to keep imports free of cycles.
"""
