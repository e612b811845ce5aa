import asyncio
import json

from toolbox_website.categories import category_index
from toolbox_website.favorites import FAVORITES_SLOT
from toolbox_website.favorites import FavoritesProvider
from toolbox_website.favorites import FavoritesState
from toolbox_website.favorites import FavoritesStore
from toolbox_website.favorites import decode_favorites
from toolbox_website.favorites import encode_favorites
from toolbox_website.models import Tool
from toolbox_website.storage import LocalFileStorage
from toolbox_website.storage import MemoryStorage
from toolbox_website.storage import StorageUnavailableError


def _tool(tool_id, name=None, category="calculation"):
    return Tool(id=tool_id, name=name or tool_id.title(), category=category_index.by_id(category))


class BrokenStorage(MemoryStorage):
    """Fails on read, write or both."""

    def __init__(self, fail_read=False, fail_write=False, initial=None):
        super().__init__(initial)
        self.fail_read = fail_read
        self.fail_write = fail_write

    def read(self, slot):
        if self.fail_read:
            raise StorageUnavailableError("storage disabled")
        return super().read(slot)

    def write(self, slot, value):
        if self.fail_write:
            raise StorageUnavailableError("quota exceeded")
        super().write(slot, value)


def _ready_store(storage=None):
    store = FavoritesStore(storage if storage is not None else MemoryStorage())
    store.initialize_sync()
    return store


def test_empty_slot_initializes_to_empty():
    store = _ready_store()
    assert store.state is FavoritesState.EMPTY
    assert store.favorites() == []


def test_add_then_reload_round_trips_through_storage():
    storage = MemoryStorage()
    store = _ready_store(storage)
    bmi = _tool("bmi-calculator", "BMI Calculator")
    store.add_favorite(bmi)
    store.add_favorite(_tool("loan"))

    reloaded = _ready_store(storage)
    assert reloaded.state is FavoritesState.LOADED
    assert [tool.id for tool in reloaded.favorites()] == ["bmi-calculator", "loan"]
    assert reloaded.favorites()[0] == bmi


def test_add_is_idempotent():
    storage = MemoryStorage()
    store = _ready_store(storage)
    tool = _tool("bmi")

    assert store.add_favorite(tool) is True
    assert store.add_favorite(tool) is False
    assert len(store) == 1
    assert storage.writes == 1


def test_each_accepted_mutation_writes_the_full_list_once():
    storage = MemoryStorage()
    store = _ready_store(storage)
    store.add_favorite(_tool("a"))
    store.add_favorite(_tool("b"))
    store.remove_favorite("a")

    assert storage.writes == 3
    assert [entry["id"] for entry in json.loads(storage.read(FAVORITES_SLOT))] == ["b"]


def test_remove_missing_id_still_rewrites_slot():
    storage = MemoryStorage()
    store = _ready_store(storage)
    assert store.remove_favorite("nope") is False
    assert storage.writes == 1
    assert storage.read(FAVORITES_SLOT) == "[]"


def test_is_favorite_and_state_transitions():
    store = _ready_store()
    tool = _tool("a")
    assert not store.is_favorite("a")
    store.add_favorite(tool)
    assert store.is_favorite("a")
    assert store.state is FavoritesState.LOADED
    store.remove_favorite("a")
    assert store.state is FavoritesState.EMPTY


def test_mutations_before_initialize_are_ignored():
    storage = MemoryStorage()
    store = FavoritesStore(storage)
    assert store.state is FavoritesState.UNINITIALIZED
    assert store.add_favorite(_tool("a")) is False
    assert store.remove_favorite("a") is False
    assert store.favorites() == []
    assert storage.writes == 0


def test_corrupted_slot_is_discarded_and_removed(caplog):
    storage = MemoryStorage({FAVORITES_SLOT: "{not json"})
    store = _ready_store(storage)

    assert store.state is FavoritesState.EMPTY
    assert store.favorites() == []
    assert storage.read(FAVORITES_SLOT) is None
    assert "Discarding corrupted favorites" in caplog.text


def test_non_list_and_invalid_entries_count_as_corrupt():
    for payload in ('{"id": "a"}', '[{"name": "missing id"}]', "42"):
        storage = MemoryStorage({FAVORITES_SLOT: payload})
        store = _ready_store(storage)
        assert store.state is FavoritesState.EMPTY
        assert storage.read(FAVORITES_SLOT) is None


def test_read_failure_switches_to_in_memory_mode():
    storage = BrokenStorage(fail_read=True)
    store = _ready_store(storage)

    assert store.state is FavoritesState.UNAVAILABLE
    assert store.add_favorite(_tool("a")) is True
    assert store.is_favorite("a")
    assert store.state is FavoritesState.UNAVAILABLE
    assert storage.writes == 0


def test_write_failure_keeps_in_memory_list(caplog):
    storage = BrokenStorage(fail_write=True)
    store = _ready_store(storage)

    assert store.add_favorite(_tool("a")) is True
    assert store.is_favorite("a")
    assert "Failed to persist favorites" in caplog.text


def test_snapshot_survives_catalog_changes():
    payload = encode_favorites([_tool("retired-tool", "Retired Tool")])
    tools = decode_favorites(payload)
    assert tools[0].name == "Retired Tool"


def test_snapshot_with_bare_unknown_category_uses_default():
    payload = json.dumps([{"id": "a", "name": "A", "category": "gone"}])
    assert decode_favorites(payload)[0].category == category_index.default


def test_decode_drops_repeated_ids():
    payload = encode_favorites([_tool("a"), _tool("a"), _tool("b")])
    assert [tool.id for tool in decode_favorites(payload)] == ["a", "b"]


def test_async_initialize_reads_slot():
    storage = MemoryStorage({FAVORITES_SLOT: encode_favorites([_tool("a")])})
    store = FavoritesStore(storage)

    state = asyncio.run(store.initialize())

    assert state is FavoritesState.LOADED
    assert store.is_favorite("a")


def test_provider_keeps_profiles_separate():
    storage = MemoryStorage()
    provider = FavoritesProvider(storage)

    async def scenario():
        alice = await provider.for_profile("alice")
        bob = await provider.for_profile("bob")
        alice.add_favorite(_tool("a"))
        return alice, bob, await provider.for_profile("alice")

    alice, bob, alice_again = asyncio.run(scenario())
    assert alice is alice_again
    assert alice.is_favorite("a")
    assert not bob.is_favorite("a")
    assert storage.read(FavoritesProvider.slot_for("alice")) is not None
    assert storage.read(FavoritesProvider.slot_for("bob")) is None


def test_provider_evicted_profiles_reload_from_storage():
    storage = MemoryStorage()
    provider = FavoritesProvider(storage, max_profiles=1)

    async def scenario():
        first = await provider.for_profile("one")
        first.add_favorite(_tool("a"))
        await provider.for_profile("two")
        return first, await provider.for_profile("one")

    first, reloaded = asyncio.run(scenario())
    assert reloaded is not first
    assert reloaded.is_favorite("a")


def test_local_file_storage_round_trip(tmp_path):
    storage = LocalFileStorage(tmp_path / "favorites")
    store = _ready_store(storage)
    store.add_favorite(_tool("a"))

    assert (tmp_path / "favorites" / f"{FAVORITES_SLOT}.json").exists()
    assert _ready_store(LocalFileStorage(tmp_path / "favorites")).is_favorite("a")


def test_local_file_storage_rejects_unsafe_slot_names(tmp_path):
    storage = LocalFileStorage(tmp_path)
    store = FavoritesStore(storage, slot="../escape")
    assert store.initialize_sync() is FavoritesState.UNAVAILABLE


def test_add_then_remove_restores_previous_set():
    store = _ready_store()
    store.add_favorite(_tool("a"))
    before = store.favorites()

    store.add_favorite(_tool("b"))
    store.remove_favorite("b")

    assert store.favorites() == before


def test_deeply_nested_payload_is_discarded_not_raised(caplog):
    storage = MemoryStorage({FAVORITES_SLOT: "[" * 200000})
    store = _ready_store(storage)

    assert store.state is FavoritesState.EMPTY
    assert storage.read(FAVORITES_SLOT) is None
    assert "Discarding corrupted favorites" in caplog.text


def test_undecodable_file_is_discarded_and_profile_keeps_persisting(tmp_path):
    directory = tmp_path / "favorites"
    directory.mkdir()
    path = directory / f"{FAVORITES_SLOT}.json"
    path.write_bytes(b"\xff\xfe\xfa not utf8")

    store = _ready_store(LocalFileStorage(directory))

    assert store.state is FavoritesState.EMPTY
    assert not path.exists()
    store.add_favorite(_tool("a"))
    assert _ready_store(LocalFileStorage(directory)).is_favorite("a")


def test_mutations_can_run_in_worker_threads():
    storage = MemoryStorage()
    store = FavoritesStore(storage)

    async def scenario():
        await store.initialize()
        await asyncio.gather(*(asyncio.to_thread(store.add_favorite, _tool(f"t{i}")) for i in range(8)))

    asyncio.run(scenario())
    assert len(store) == 8
    assert len(json.loads(storage.read(FAVORITES_SLOT))) == 8
