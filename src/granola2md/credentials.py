"""Load Granola access tokens from the desktop app's session file."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Callable

from granola2md.config import (
    GRANOLA2MD_CREDENTIALS_PATH,
    GRANOLA2MD_TOKEN_LIFETIME_S,
    GRANOLA2MD_TOKEN_REFRESH_SKEW_S,
)
from granola2md.exceptions import CredentialsError

logger = logging.getLogger(__name__)


def _now_ms() -> float:
    return time.time() * 1000


class TokenStore:
    """Cache a bearer token and reload it shortly before it expires.

    Granola writes ``supabase.json`` with a ``workos_tokens`` field holding a
    JSON-encoded object: ``access_token``, ``expires_in`` (seconds) and
    ``obtained_at`` (epoch milliseconds).

    Args:
        path: Location of the session file.
        clock: Returns the current time in epoch milliseconds.
        refresh_skew_s: Reload the token this many seconds before expiry.
    """

    def __init__(
        self,
        path: Path | None = None,
        *,
        clock: Callable[[], float] = _now_ms,
        refresh_skew_s: int = GRANOLA2MD_TOKEN_REFRESH_SKEW_S,
    ) -> None:
        self.path = path or GRANOLA2MD_CREDENTIALS_PATH
        self._clock = clock
        self._refresh_skew_ms = refresh_skew_s * 1000
        self.access_token: str | None = None
        self.token_expiry: float = 0

    def load(self) -> str:
        """Read the session file and cache its access token.

        Raises:
            CredentialsError: If the file is missing, unreadable, or lacks
                an access token.
        """
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            tokens = _decode_tokens(data["workos_tokens"])
            access_token = tokens["access_token"]
            expires_in = float(tokens.get("expires_in") or GRANOLA2MD_TOKEN_LIFETIME_S)
            obtained_at = float(tokens.get("obtained_at") or self._clock())
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.error("Error loading Granola credentials from %s: %s", self.path, exc)
            raise CredentialsError(
                f"Failed to load Granola credentials from {self.path}"
            ) from exc

        if not isinstance(access_token, str) or not access_token:
            raise CredentialsError(f"No access token found in {self.path}")

        self.token_expiry = obtained_at + expires_in * 1000
        self.access_token = access_token
        logger.debug("Loaded Granola token expiring at %s", self.token_expiry)
        return access_token

    def is_expired(self) -> bool:
        """True when the token is within the refresh skew of its expiry."""
        return self._clock() >= self.token_expiry - self._refresh_skew_ms

    def get_access_token(self) -> str:
        """Return a usable token, reloading the session file if needed."""
        if self.access_token is None or self.is_expired():
            return self.load()
        return self.access_token

    def invalidate(self) -> None:
        """Forget the cached token so the next call reloads it."""
        self.access_token = None
        self.token_expiry = 0


def _decode_tokens(raw: Any) -> dict[str, Any]:
    tokens = json.loads(raw) if isinstance(raw, str) else raw
    if not isinstance(tokens, dict):
        raise TypeError("workos_tokens is not an object")
    return tokens
