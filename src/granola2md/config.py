"""Local configuration for granola2md."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_API_URL = "https://api.granola.ai/v2/get-documents"
DEFAULT_CREDENTIALS_PATH = "~/Library/Application Support/Granola/supabase.json"
DEFAULT_PAGE_SIZE = 100
DEFAULT_MAX_OFFSET = 10_000
DEFAULT_FETCH_TIMEOUT_S = 30.0
DEFAULT_FETCH_MAX_RETRIES = 2
DEFAULT_FETCH_BACKOFF_S = 0.5
DEFAULT_CLIENT_VERSION = "5.354.0"
DEFAULT_TOKEN_LIFETIME_S = 6 * 60 * 60
DEFAULT_TOKEN_REFRESH_SKEW_S = 5 * 60

GRANOLA2MD_API_URL = os.getenv("GRANOLA2MD_API_URL", DEFAULT_API_URL)
# Written by the Granola desktop app; holds the WorkOS session tokens.
GRANOLA2MD_CREDENTIALS_PATH = Path(os.getenv("GRANOLA2MD_CREDENTIALS_PATH", DEFAULT_CREDENTIALS_PATH)).expanduser()
GRANOLA2MD_PAGE_SIZE = int(os.getenv("GRANOLA2MD_PAGE_SIZE", str(DEFAULT_PAGE_SIZE)))
GRANOLA2MD_MAX_OFFSET = int(os.getenv("GRANOLA2MD_MAX_OFFSET", str(DEFAULT_MAX_OFFSET)))
GRANOLA2MD_FETCH_TIMEOUT_S = float(os.getenv("GRANOLA2MD_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
GRANOLA2MD_FETCH_MAX_RETRIES = int(os.getenv("GRANOLA2MD_FETCH_MAX_RETRIES", str(DEFAULT_FETCH_MAX_RETRIES)))
GRANOLA2MD_FETCH_BACKOFF_S = float(os.getenv("GRANOLA2MD_FETCH_BACKOFF_S", str(DEFAULT_FETCH_BACKOFF_S)))
GRANOLA2MD_CLIENT_VERSION = os.getenv("GRANOLA2MD_CLIENT_VERSION", DEFAULT_CLIENT_VERSION)
GRANOLA2MD_USER_AGENT = os.getenv("GRANOLA2MD_USER_AGENT", f"Granola/{GRANOLA2MD_CLIENT_VERSION}")
GRANOLA2MD_TOKEN_LIFETIME_S = int(os.getenv("GRANOLA2MD_TOKEN_LIFETIME_S", str(DEFAULT_TOKEN_LIFETIME_S)))
GRANOLA2MD_TOKEN_REFRESH_SKEW_S = int(
    os.getenv("GRANOLA2MD_TOKEN_REFRESH_SKEW_S", str(DEFAULT_TOKEN_REFRESH_SKEW_S))
)
