"""
Remote deck source.

Reads a signed-in user's active deck from the deck service. The engine
performs a single read per sign-in, with no retry; the timeout is the
only bound applied.
"""

from typing import Protocol

import httpx

from decksmith.config import settings
from decksmith.models.deck import Deck
from decksmith.services.deck_records import DeckRecordError, deck_from_record


class RemoteDeckError(Exception):
    """Raised when the remote deck could not be fetched or read."""

    pass


class RemoteDeckSource(Protocol):
    """Anything that can fetch a user's active deck."""

    async def fetch_active_deck(self, user_id: str) -> Deck | None: ...


class RemoteDeckClient:
    """HTTP client for the deck service."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.remote_decks_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.remote_timeout_seconds
        self._transport = transport

    async def fetch_active_deck(self, user_id: str) -> Deck | None:
        """
        Fetch the user's active deck.

        Returns:
            The deck, or None if the user has no active deck (404).

        Raises:
            RemoteDeckError: On transport errors, timeouts, HTTP errors,
                or a payload that is not a deck record
        """
        url = f"{self.base_url}/users/{user_id}/decks/active"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
                if response.status_code == httpx.codes.NOT_FOUND:
                    return None
                response.raise_for_status()
                record = response.json()
        except httpx.HTTPStatusError as e:
            raise RemoteDeckError(
                f"Failed to fetch deck for {user_id}: HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise RemoteDeckError(f"Failed to fetch deck for {user_id}: {e}") from e
        except ValueError as e:
            raise RemoteDeckError(f"Deck service returned invalid JSON: {e}") from e

        if record is None:
            return None

        try:
            return deck_from_record(record)
        except DeckRecordError as e:
            raise RemoteDeckError(f"Deck service returned an unreadable deck: {e}") from e
