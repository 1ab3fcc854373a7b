"""
Scryfall collection lookup client.

Resolves up to 75 Scryfall IDs per request against the
`/cards/collection` endpoint.

API docs: https://scryfall.com/docs/api/cards/collection
"""

import logging
from collections.abc import Sequence
from types import TracebackType
from typing import Any

import httpx

from manaimport.config import Settings
from manaimport.errors import EnrichmentFailedError

logger = logging.getLogger(__name__)

SCRYFALL_COLLECTION_ENDPOINT = "https://api.scryfall.com/cards/collection"
USER_AGENT = "ManaImport/1.0"

# Scryfall rejects collection requests with more identifiers than this
MAX_IDENTIFIERS = 75


def build_collection_query(identifiers: Sequence[str]) -> dict[str, list[dict[str, str]]]:
    """Build the request body, keeping order and duplicates."""
    return {"identifiers": [{"id": identifier} for identifier in identifiers]}


class ScryfallClient:
    """
    Thin async client for the Scryfall collection endpoint.

    Either wrap an existing httpx.AsyncClient (the caller closes it) or
    use `ScryfallClient.create()` as an async context manager, which owns
    and closes its own client.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        url: str = SCRYFALL_COLLECTION_ENDPOINT,
        user_agent: str = USER_AGENT,
    ) -> None:
        self._http = http_client
        self._url = url
        self._headers = {
            "User-Agent": user_agent,
            "Accept": "application/json",
        }
        self._owns_client = False

    @classmethod
    def create(cls, settings: Settings) -> "ScryfallClient":
        """Build a client with its own connection pool from settings."""
        client = cls(
            httpx.AsyncClient(timeout=settings.http_timeout),
            url=settings.scryfall_collection_url,
            user_agent=settings.user_agent,
        )
        client._owns_client = True
        return client

    async def __aenter__(self) -> "ScryfallClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def fetch_collection(self, identifiers: Sequence[str]) -> list[dict[str, Any]]:
        """
        Look up card metadata for a batch of Scryfall IDs.

        Args:
            identifiers: Scryfall IDs in batch order; duplicates allowed

        Returns:
            The card objects from the response's `data` list, in the
            order Scryfall returned them. IDs Scryfall does not know are
            simply absent.

        Raises:
            ValueError: If more than MAX_IDENTIFIERS are requested
            EnrichmentFailedError: On transport errors, non-2xx responses,
                or a body without a `data` list
        """
        if len(identifiers) > MAX_IDENTIFIERS:
            raise ValueError(
                f"Scryfall accepts at most {MAX_IDENTIFIERS} identifiers, got {len(identifiers)}"
            )

        logger.debug("Requesting %d identifiers from %s", len(identifiers), self._url)

        try:
            response = await self._http.post(
                self._url,
                headers=self._headers,
                json=build_collection_query(identifiers),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise EnrichmentFailedError(
                f"Scryfall collection lookup failed: HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise EnrichmentFailedError(f"Scryfall collection lookup failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise EnrichmentFailedError("Scryfall returned a non-JSON response") from e

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, list):
            raise EnrichmentFailedError("Scryfall response has no 'data' list")

        return data
