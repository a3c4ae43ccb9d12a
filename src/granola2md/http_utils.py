"""HTTP utilities for calling the Granola API with retry logic and connection pooling."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Final

import httpx

from granola2md.config import (
    GRANOLA2MD_FETCH_BACKOFF_S,
    GRANOLA2MD_FETCH_MAX_RETRIES,
    GRANOLA2MD_FETCH_TIMEOUT_S,
)
from granola2md.exceptions import CredentialsError, FetchError, RateLimitError

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})

_MAX_REDIRECTS: Final[int] = 5


async def post_json_with_retries(
    url: str,
    payload: dict[str, Any],
    *,
    headers: dict[str, str] | None = None,
    client: httpx.AsyncClient | None = None,
) -> Any:
    """POST a JSON body and decode the JSON response, retrying transient failures.

    Args:
        url: The endpoint to call.
        payload: JSON-serializable request body.
        headers: Extra request headers (authorization, client version).
        client: Optional httpx.AsyncClient for connection pooling. If not
            provided, a new client is created for this request.

    Returns:
        The decoded JSON response body.

    Raises:
        CredentialsError: If the API rejects the bearer token (401).
        RateLimitError: If the API is still rate limiting after all retries.
        FetchError: If the request fails after all retries, returns a
            non-retryable error status, or the body is not JSON.
    """
    last_exc: Exception | None = None

    async def do_post(http_client: httpx.AsyncClient) -> Any:
        nonlocal last_exc

        for attempt in range(GRANOLA2MD_FETCH_MAX_RETRIES + 1):
            try:
                response = await http_client.post(url, json=payload, headers=headers)

                if response.status_code == 401:
                    raise CredentialsError(f"Granola API rejected the access token ({url})")

                if response.status_code == 429:
                    last_exc = RateLimitError(f"HTTP 429 from {url}")
                elif response.status_code in RETRY_STATUS_CODES:
                    last_exc = FetchError(f"HTTP {response.status_code} from {url}")
                else:
                    response.raise_for_status()
                    return response.json()
            except httpx.HTTPStatusError as exc:
                raise FetchError(
                    f"Granola API error: {exc.response.status_code} "
                    f"{exc.response.reason_phrase}"
                ) from exc
            except httpx.RequestError as exc:
                last_exc = exc
            except ValueError as exc:
                raise FetchError(f"Invalid JSON response from {url}") from exc

            if attempt < GRANOLA2MD_FETCH_MAX_RETRIES:
                backoff = GRANOLA2MD_FETCH_BACKOFF_S * (2**attempt)
                logger.debug(
                    "Retrying %s in %.2fs after %s", url, backoff, last_exc
                )
                await asyncio.sleep(backoff)

        if isinstance(last_exc, RateLimitError):
            raise last_exc
        raise FetchError(f"Failed to fetch {url}: {last_exc}")

    if client is not None:
        return await do_post(client)

    async with build_async_client() as new_client:
        return await do_post(new_client)


def build_async_client() -> httpx.AsyncClient:
    """Create an httpx.AsyncClient with the timeout and redirect settings used for every API call."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(GRANOLA2MD_FETCH_TIMEOUT_S),
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
    )
