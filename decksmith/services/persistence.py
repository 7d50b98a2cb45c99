"""
Local persistence bridge.

While nobody is signed in, every change to the deck being edited is
written to a client-local store under a fixed key, so unsaved work
survives a reload. When a session appears (none -> signed in), a pending
local deck with at least one card is adopted once and the local copy is
removed. This is a one-shot migration, not a sync.

Nothing here is fatal: store failures are logged and the deck carries on
in memory; remote failures fall back to the local deck.
"""

import logging
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from decksmith.config import TEMPORARY_DECK_KEY
from decksmith.models.db import LocalRecordDB
from decksmith.models.deck import Deck
from decksmith.services.composition import DeckSession
from decksmith.services.deck_records import DeckRecordError, deserialize_deck, serialize_deck
from decksmith.services.remote_decks import RemoteDeckError, RemoteDeckSource

logger = logging.getLogger(__name__)


class LocalStoreError(Exception):
    """The local store could not be read or written."""


# =============================================================================
# LOCAL STORES
# =============================================================================


class LocalStore(Protocol):
    """Key/value store local to the client. Failures raise LocalStoreError."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryLocalStore:
    """Dict-backed store (tests, or clients with no durable storage)."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class SqlLocalStore:
    """Store backed by the `local_store` table (see decksmith.models.db)."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get(self, key: str) -> str | None:
        try:
            with self._session_factory() as session:
                row = session.scalar(select(LocalRecordDB).where(LocalRecordDB.key == key))
                return row.payload if row is not None else None
        except SQLAlchemyError as e:
            raise LocalStoreError(f"Failed to read {key}: {e}") from e

    def set(self, key: str, value: str) -> None:
        try:
            with self._session_factory.begin() as session:
                row = session.get(LocalRecordDB, key)
                if row is None:
                    session.add(LocalRecordDB(key=key, payload=value))
                else:
                    row.payload = value
        except SQLAlchemyError as e:
            raise LocalStoreError(f"Failed to write {key}: {e}") from e

    def delete(self, key: str) -> None:
        try:
            with self._session_factory.begin() as session:
                row = session.get(LocalRecordDB, key)
                if row is not None:
                    session.delete(row)
        except SQLAlchemyError as e:
            raise LocalStoreError(f"Failed to delete {key}: {e}") from e


# =============================================================================
# BRIDGE
# =============================================================================


class PersistenceBridge:
    """
    Connects a DeckSession to the local store and the remote deck source.

    Usage:
        bridge = PersistenceBridge(session, store, remote)
        bridge.attach()
        bridge.restore_pending()          # at start-up, anonymous user
        await bridge.on_auth_change(uid)  # whenever the signed-in user changes
    """

    def __init__(
        self,
        session: DeckSession,
        store: LocalStore,
        remote: RemoteDeckSource | None = None,
        key: str = TEMPORARY_DECK_KEY,
    ) -> None:
        self.session = session
        self.store = store
        self.remote = remote
        self.key = key
        self.user_id: str | None = None
        self._unsubscribe = None

    def attach(self) -> None:
        """Start writing deck changes to the local store."""
        if self._unsubscribe is None:
            self._unsubscribe = self.session.subscribe(self._on_deck_changed)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_deck_changed(self, deck: Deck) -> None:
        if self.user_id is not None:
            return
        if deck.is_pristine():
            return
        try:
            self.store.set(self.key, serialize_deck(deck))
        except LocalStoreError as e:
            logger.warning("Local deck not saved: %s", e)

    def read_pending(self) -> Deck | None:
        """Deck waiting in the local store, if a readable one exists."""
        try:
            payload = self.store.get(self.key)
        except LocalStoreError as e:
            logger.warning("Local deck unavailable: %s", e)
            return None

        if payload is None:
            return None

        try:
            return deserialize_deck(payload)
        except DeckRecordError as e:
            logger.warning("Ignoring unreadable local deck: %s", e)
            return None

    def clear_pending(self) -> None:
        try:
            self.store.delete(self.key)
        except LocalStoreError as e:
            logger.warning("Local deck not cleared: %s", e)

    def restore_pending(self) -> bool:
        """
        Load a pending local deck into the session (start-up, anonymous).

        The local copy is kept; it keeps tracking the deck from here on.

        Returns:
            True if a deck with at least one card was loaded.
        """
        pending = self.read_pending()
        if pending is None or pending.is_empty():
            return False
        self.session.load(pending)
        return True

    async def on_auth_change(self, user_id: str | None) -> Deck | None:
        """
        Track the signed-in user; migrate the local deck on sign-in.

        On the none -> present transition the pending local deck, if it
        has cards, becomes the active deck and is removed from the store.
        With no pending deck, one read of the user's active remote deck is
        attempted; a failure counts as "no remote deck".

        Returns:
            The deck adopted into the session, or None.
        """
        previous = self.user_id
        self.user_id = user_id

        if previous is not None or user_id is None:
            return None

        pending = self.read_pending()
        if pending is not None and not pending.is_empty():
            self.session.load(pending)
            self.clear_pending()
            logger.info(
                "Migrated local deck %r (%d cards) for user %s",
                pending.name,
                pending.total_cards(),
                user_id,
            )
            return pending

        remote_deck = await self._fetch_remote(user_id)
        if remote_deck is None:
            return None

        self.session.load(remote_deck)
        logger.info("Loaded remote deck %r for user %s", remote_deck.name, user_id)
        return remote_deck

    async def _fetch_remote(self, user_id: str) -> Deck | None:
        if self.remote is None:
            return None
        try:
            return await self.remote.fetch_active_deck(user_id)
        except RemoteDeckError as e:
            logger.warning("Remote deck unavailable for user %s, using local data: %s", user_id, e)
            return None
        except Exception as e:
            # Sources other than RemoteDeckClient may raise anything (timeouts included)
            logger.warning(
                "Remote deck source failed for user %s, using local data: %r", user_id, e
            )
            return None
