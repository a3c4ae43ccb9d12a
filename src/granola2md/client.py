"""Async client for the Granola documents API."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx
from pydantic import ValidationError

from granola2md.config import (
    GRANOLA2MD_API_URL,
    GRANOLA2MD_CLIENT_VERSION,
    GRANOLA2MD_MAX_OFFSET,
    GRANOLA2MD_PAGE_SIZE,
    GRANOLA2MD_USER_AGENT,
)
from granola2md.credentials import TokenStore
from granola2md.documents import find_document, search_documents
from granola2md.exceptions import CredentialsError, FetchError
from granola2md.http_utils import build_async_client, post_json_with_retries
from granola2md.schemas import GranolaDocument

logger = logging.getLogger(__name__)


class GranolaClient:
    """Fetch Granola documents page by page.

    Use as an async context manager to share one pooled connection across
    pages; outside a context each request opens its own connection.

    Args:
        token_store: Source of bearer tokens. Defaults to the desktop app's
            session file.
        api_url: Documents endpoint.
        page_size: Documents requested per page.
        max_offset: Stop paginating once the offset passes this value.
    """

    def __init__(
        self,
        token_store: TokenStore | None = None,
        *,
        api_url: str = GRANOLA2MD_API_URL,
        page_size: int = GRANOLA2MD_PAGE_SIZE,
        max_offset: int = GRANOLA2MD_MAX_OFFSET,
    ) -> None:
        self.token_store = token_store or TokenStore()
        self.api_url = api_url
        self.page_size = page_size
        self.max_offset = max_offset
        self._http: httpx.AsyncClient | None = None

    async def __aenter__(self) -> GranolaClient:
        self._http = build_async_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    def _headers(self) -> dict[str, str]:
        token = self.token_store.get_access_token()
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "Accept": "*/*",
            "User-Agent": GRANOLA2MD_USER_AGENT,
            "X-Client-Version": GRANOLA2MD_CLIENT_VERSION,
        }

    async def _fetch_page(self, limit: int, offset: int) -> list[Any]:
        """Fetch one page of raw document payloads.

        A rejected token is dropped from the store so the next call reloads it.
        """
        body = {
            "limit": limit,
            "offset": offset,
            "include_last_viewed_panel": True,
        }
        try:
            data = await post_json_with_retries(
                self.api_url, body, headers=self._headers(), client=self._http
            )
        except CredentialsError:
            self.token_store.invalidate()
            raise
        if not isinstance(data, dict):
            raise FetchError(f"Unexpected response shape from {self.api_url}")
        raw_docs = data.get("docs")
        return raw_docs if isinstance(raw_docs, list) else []

    async def fetch_documents(
        self, limit: int | None = None, offset: int = 0
    ) -> list[GranolaDocument]:
        """Fetch one page of documents.

        Documents that do not match the envelope schema are skipped with a
        warning.

        Raises:
            CredentialsError: If no usable token is available or the API
                rejects it.
            FetchError: If the request fails.
        """
        page_limit = limit if limit is not None else self.page_size
        return _parse_documents(await self._fetch_page(page_limit, offset))

    async def get_all_documents(self) -> list[GranolaDocument]:
        """Fetch every page until an empty page or the offset cap.

        The stop check counts raw documents, so a page made only of
        malformed entries does not end pagination.
        """
        all_docs: list[GranolaDocument] = []
        offset = 0
        while True:
            raw_docs = await self._fetch_page(self.page_size, offset)
            if not raw_docs:
                break
            all_docs.extend(_parse_documents(raw_docs))
            offset += self.page_size
            if offset > self.max_offset:
                logger.warning(
                    "Stopped paginating at offset %d with %d documents",
                    offset,
                    len(all_docs),
                )
                break
        return all_docs

    async def search_documents(self, query: str, limit: int = 10) -> list[GranolaDocument]:
        return search_documents(await self.get_all_documents(), query, limit=limit)

    async def get_document_by_id(self, document_id: str) -> GranolaDocument | None:
        return find_document(await self.get_all_documents(), document_id)


def _parse_documents(raw_docs: Any) -> list[GranolaDocument]:
    if not isinstance(raw_docs, list):
        return []
    docs: list[GranolaDocument] = []
    for raw in raw_docs:
        try:
            docs.append(GranolaDocument.model_validate(raw))
        except ValidationError as exc:
            logger.warning("Skipping malformed document: %s", exc.errors()[:1])
    return docs
