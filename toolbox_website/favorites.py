"""Per-profile favorites with load-time validation and corruption recovery.

Favorites persist full tool snapshots rather than ids so that a favorite stays
renderable after its catalog entry is renamed or removed.
"""

import asyncio
import json
import logging
import threading
from collections import OrderedDict
from enum import Enum
from typing import List
from typing import Optional

from pydantic import ValidationError

from toolbox_website.models import Tool
from toolbox_website.storage import CorruptSlotError
from toolbox_website.storage import StorageBackend

logger = logging.getLogger(__name__)

FAVORITES_SLOT = "favoriteTools"


class FavoritesState(str, Enum):
    UNINITIALIZED = "uninitialized"
    EMPTY = "empty"
    LOADED = "loaded"
    # Backend could not be read: in-memory only for the rest of the session.
    UNAVAILABLE = "unavailable"


class CorruptFavoritesError(ValueError):
    """Persisted favorites could not be decoded into a list of tools."""


def decode_favorites(raw: str) -> List[Tool]:
    """Decode a persisted favorites payload.

    Raises ``CorruptFavoritesError`` for anything other than a JSON list of
    tool snapshots. Repeated ids keep their first occurrence.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as e:
        raise CorruptFavoritesError(f"not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise CorruptFavoritesError(f"expected a list, got {type(data).__name__}")

    tools: List[Tool] = []
    seen = set()
    for entry in data:
        try:
            tool = Tool.from_snapshot(entry)
        except ValidationError as e:
            raise CorruptFavoritesError(f"invalid tool snapshot: {e}") from e
        if tool.id in seen:
            logger.warning(f"Dropping repeated favorite '{tool.id}' from persisted list")
            continue
        seen.add(tool.id)
        tools.append(tool)
    return tools


def encode_favorites(tools: List[Tool]) -> str:
    return json.dumps([tool.snapshot() for tool in tools])


class FavoritesStore:
    """Ordered set of favorite tools backed by a single storage slot.

    Mutations go through ``add_favorite`` and ``remove_favorite`` only; each
    accepted mutation rewrites the whole slot once. No storage error escapes.
    Storage I/O is blocking, so async callers run these methods in a thread.
    """

    def __init__(self, storage: StorageBackend, slot: str = FAVORITES_SLOT):
        self._storage = storage
        self.slot = slot
        self._favorites: List[Tool] = []
        self._lock = threading.Lock()
        self.state = FavoritesState.UNINITIALIZED

    @property
    def ready(self) -> bool:
        return self.state is not FavoritesState.UNINITIALIZED

    async def initialize(self) -> FavoritesState:
        """Read the persisted slot without blocking the event loop."""
        if self.ready:
            return self.state
        return await asyncio.to_thread(self.initialize_sync)

    def initialize_sync(self) -> FavoritesState:
        with self._lock:
            # A concurrent initialize may have finished while this one waited.
            if self.ready:
                return self.state
            try:
                raw = self._storage.read(self.slot)
            except CorruptSlotError as e:
                return self._discard(e)
            except Exception as e:  # noqa: BLE001
                return self._mark_unavailable(e)
            return self._apply(raw)

    def _mark_unavailable(self, error: Exception) -> FavoritesState:
        logger.error(f"Favorites storage unavailable for slot '{self.slot}', keeping favorites in memory: {error}")
        self._favorites = []
        self.state = FavoritesState.UNAVAILABLE
        return self.state

    def _discard(self, error: Exception) -> FavoritesState:
        logger.error(f"Discarding corrupted favorites in slot '{self.slot}': {error}")
        self._favorites = []
        self.state = FavoritesState.EMPTY
        try:
            self._storage.remove(self.slot)
        except Exception as remove_error:  # noqa: BLE001
            logger.warning(f"Failed to clear corrupted favorites slot '{self.slot}': {remove_error}")
        return self.state

    def _apply(self, raw: Optional[str]) -> FavoritesState:
        if raw is None:
            self._favorites = []
            self.state = FavoritesState.EMPTY
            return self.state

        try:
            self._favorites = decode_favorites(raw)
        except CorruptFavoritesError as e:
            return self._discard(e)

        self.state = FavoritesState.LOADED if self._favorites else FavoritesState.EMPTY
        logger.debug(f"Loaded {len(self._favorites)} favorites from slot '{self.slot}'")
        return self.state

    def favorites(self) -> List[Tool]:
        return list(self._favorites)

    def is_favorite(self, tool_id: str) -> bool:
        return any(tool.id == tool_id for tool in self._favorites)

    def add_favorite(self, tool: Tool) -> bool:
        """Append ``tool`` unless already present. Returns True if it was added."""
        with self._lock:
            if not self.ready:
                logger.debug(f"Ignoring add of '{tool.id}' before favorites finished loading")
                return False
            if self.is_favorite(tool.id):
                return False
            self._favorites = [*self._favorites, tool]
            self._after_mutation()
            return True

    def remove_favorite(self, tool_id: str) -> bool:
        """Drop ``tool_id``; always rewrites the slot. Returns True if it was present."""
        with self._lock:
            if not self.ready:
                logger.debug(f"Ignoring removal of '{tool_id}' before favorites finished loading")
                return False
            remaining = [tool for tool in self._favorites if tool.id != tool_id]
            removed = len(remaining) != len(self._favorites)
            self._favorites = remaining
            self._after_mutation()
            return removed

    def _after_mutation(self) -> None:
        if self.state is not FavoritesState.UNAVAILABLE:
            self.state = FavoritesState.LOADED if self._favorites else FavoritesState.EMPTY
        self._persist()

    def _persist(self) -> None:
        if self.state is FavoritesState.UNAVAILABLE:
            logger.debug(f"Favorites storage unavailable, not persisting slot '{self.slot}'")
            return
        payload = encode_favorites(self._favorites)
        try:
            self._storage.write(self.slot, payload)
        except Exception as e:  # noqa: BLE001
            # In-memory favorites stay authoritative for this session.
            logger.warning(f"Failed to persist favorites to slot '{self.slot}': {e}")

    def __len__(self) -> int:
        return len(self._favorites)


class FavoritesProvider:
    """Composition root owning one favorites store per visitor profile."""

    def __init__(self, storage: StorageBackend, max_profiles: int = 1024):
        self._storage = storage
        self._max_profiles = max_profiles
        self._stores: "OrderedDict[str, FavoritesStore]" = OrderedDict()

    @staticmethod
    def slot_for(profile_id: str) -> str:
        return f"{FAVORITES_SLOT}-{profile_id}"

    def peek(self, profile_id: str) -> FavoritesStore:
        """Store for ``profile_id``, created but not necessarily initialized."""
        store = self._stores.get(profile_id)
        if store is None:
            store = FavoritesStore(self._storage, self.slot_for(profile_id))
            self._stores[profile_id] = store
            # Every mutation is persisted, so evicted stores reload from storage.
            while len(self._stores) > self._max_profiles:
                self._stores.popitem(last=False)
        else:
            self._stores.move_to_end(profile_id)
        return store

    async def for_profile(self, profile_id: str) -> FavoritesStore:
        store = self.peek(profile_id)
        await store.initialize()
        return store
