"""
Google Calendar Digest: fetch, merge, render and cache upcoming events.
"""

__version__ = "1.0.0"
