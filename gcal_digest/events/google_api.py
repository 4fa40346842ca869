# ╔════════════════════════════════════════════════════════════════════════════╗
# ║                       GOOGLE CALENDAR API MODULE                           ║
# ║    Refreshes the OAuth user token once per run and builds the Calendar     ║
# ║    v3 service on top of an authorized, deadline-bounded HTTP transport.    ║
# ╚════════════════════════════════════════════════════════════════════════════╝

"""
google_api.py: OAuth token refresh and Google Calendar service construction.
"""
import datetime
from typing import Optional

import google_auth_httplib2
import httplib2
import requests
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from config.calendar_config import DigestSettings, OAuthSettings, SourceConfig
from utils.error_handling import AuthError
from utils.logging import logger

# Refresh tokens that expire within this margin
EXPIRY_SKEW = datetime.timedelta(seconds=60)

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ TOKEN REFRESH                                                             ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- needs_refresh ---
# A token with no access token or no known expiry is always refreshed:
# the token stored in the config file is usually stale.
def needs_refresh(oauth: OAuthSettings, now: Optional[datetime.datetime] = None) -> bool:
    if not oauth.access_token or oauth.expiry is None:
        return True
    now = now or datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)
    return oauth.expiry <= now + EXPIRY_SKEW


def credentials_from_settings(oauth: OAuthSettings) -> Credentials:
    return Credentials(
        token=oauth.access_token,
        refresh_token=oauth.refresh_token,
        token_uri=oauth.token_uri,
        client_id=oauth.client_id,
        client_secret=oauth.client_secret,
        scopes=list(oauth.scopes),
        expiry=oauth.expiry,
    )

# --- refresh_credentials ---
# Builds fresh credentials from the configured settings and refreshes them when
# needed. Called exactly once per run, before any fetch.
# Args:
#     oauth: OAuth client and token settings from the config file.
#     request: google-auth transport request; a requests-backed one by default.
#     now: Naive UTC "now" for the expiry check.
# Returns: Refreshed-or-unchanged Credentials.
# Raises: AuthError if the refresh fails.
def refresh_credentials(oauth: OAuthSettings, request=None,
                        now: Optional[datetime.datetime] = None) -> Credentials:
    creds = credentials_from_settings(oauth)
    if not needs_refresh(oauth, now):
        logger.debug("Access token still valid, skipping refresh")
        return creds
    request = request or Request(requests.Session())
    try:
        creds.refresh(request)
    except GoogleAuthError as e:
        raise AuthError(f"Failed to refresh OAuth token: {e}") from e
    logger.info("OAuth access token refreshed")
    return creds

# ╔════════════════════════════════════════════════════════════════════════════╗
# ║ SERVICE INITIALIZATION                                                    ║
# ╚════════════════════════════════════════════════════════════════════════════╝

# --- build_calendar_service ---
# Returns a Calendar v3 service whose every request carries the refreshed
# credentials and is bounded by settings.request_timeout seconds.
# Raises: AuthError if credentials or the service cannot be set up.
def build_calendar_service(source_config: SourceConfig, settings: DigestSettings):
    creds = refresh_credentials(source_config.oauth)
    try:
        http = google_auth_httplib2.AuthorizedHttp(
            creds, http=httplib2.Http(timeout=settings.request_timeout)
        )
        service = build("calendar", "v3", http=http, cache_discovery=False)
    except Exception as e:
        raise AuthError(f"Error initializing Google Calendar service: {e}") from e
    logger.debug("Google Calendar service initialized.")
    return service
