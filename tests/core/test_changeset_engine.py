import random

import pytest
import pytest_asyncio

from core.changeset.engine import ChangeSetEngine, apply_operations, revert_change_set
from storage.models import Absent, DeleteFile, Present, WriteFile
from storage.providers.sqlite.file_store import SQLiteFileStore


@pytest_asyncio.fixture
async def store(tmp_path):
    s = SQLiteFileStore(tmp_path / "workspace.db")
    await s.initialize()
    yield s
    await s.close()


async def _contents(store) -> dict[str, str]:
    return {f.path: f.content for f in await store.list()}


class _FailingPutStore:
    """Delegates to a real store but rejects puts to one path."""

    def __init__(self, inner, failing_path: str):
        self._inner = inner
        self._failing_path = failing_path

    async def get(self, path):
        return await self._inner.get(path)

    async def put(self, path, content):
        if path == self._failing_path:
            raise OSError(f"write rejected: {path}")
        await self._inner.put(path, content)

    async def delete(self, path):
        await self._inner.delete(path)

    async def list(self):
        return await self._inner.list()


@pytest.mark.asyncio
async def test_revert_restores_mixed_batch(store):
    await store.put("a.txt", "A0")
    await store.put("b.txt", "B0")
    before = await _contents(store)

    batch = [
        WriteFile("a.txt", "A1"),
        DeleteFile("b.txt"),
        WriteFile("c.txt", "C1"),
        DeleteFile("a.txt"),
        WriteFile("b.txt", "B2"),
    ]
    change_set = await apply_operations(store, batch)
    assert await _contents(store) == {"b.txt": "B2", "c.txt": "C1"}

    await revert_change_set(store, change_set)
    assert await _contents(store) == before


_PATHS = ["a.ts", "b.ts", "src/c.ts", "src/d.ts", "e.md"]


def _random_workspace(rng: random.Random) -> dict[str, str]:
    return {p: rng.choice(["", "v0", "let x = 1;\n"]) for p in _PATHS if rng.random() < 0.5}


def _random_batch(rng: random.Random, workspace: dict[str, str]) -> list:
    batch = []
    for _ in range(rng.randint(1, 8)):
        path = rng.choice(_PATHS)
        if rng.random() < 0.4:
            batch.append(DeleteFile(path))
        else:
            batch.append(WriteFile(path, rng.choice([None, "", "v1", "v2"])))
    # guaranteed edge cases on top of the random ops
    batch.append(WriteFile(batch[0].path, "dup"))
    batch.append(DeleteFile("ghost.ts"))
    batch.append(WriteFile(rng.choice(sorted(workspace) or _PATHS)))
    rng.shuffle(batch)
    return batch


@pytest.mark.asyncio
@pytest.mark.parametrize("seed", range(30))
async def test_revert_restores_generated_batches(store, seed):
    rng = random.Random(seed)
    workspace = _random_workspace(rng)
    for path, content in workspace.items():
        await store.put(path, content)
    before = await _contents(store)

    change_set = await apply_operations(store, _random_batch(rng, workspace))
    assert set(change_set.before) == {op.path for op in change_set.operations}

    await revert_change_set(store, change_set)
    assert await _contents(store) == before


@pytest.mark.asyncio
async def test_snapshot_is_taken_once_before_the_batch(store):
    change_set = await apply_operations(store, [WriteFile("x", "1"), WriteFile("x", "2")])

    assert (await store.get("x")).content == "2"
    assert change_set.before == {"x": Absent}

    await revert_change_set(store, change_set)
    assert await store.get("x") is None


@pytest.mark.asyncio
async def test_duplicate_path_keeps_first_lookup(store):
    await store.put("x", "orig")
    change_set = await apply_operations(store, [DeleteFile("x"), WriteFile("x", "new")])

    assert change_set.before["x"] == Present("orig")
    await revert_change_set(store, change_set)
    assert (await store.get("x")).content == "orig"


@pytest.mark.asyncio
async def test_write_without_content_is_noop(store):
    await apply_operations(store, [WriteFile("a.txt")])
    assert await store.get("a.txt") is None

    await store.put("a.txt", "kept")
    await apply_operations(store, [WriteFile("a.txt", None)])
    assert (await store.get("a.txt")).content == "kept"


@pytest.mark.asyncio
async def test_empty_string_write_differs_from_missing_content(store):
    await store.put("a.txt", "kept")
    change_set = await apply_operations(store, [WriteFile("a.txt", "")])
    assert (await store.get("a.txt")).content == ""

    await revert_change_set(store, change_set)
    assert (await store.get("a.txt")).content == "kept"


@pytest.mark.asyncio
async def test_snapshot_distinguishes_empty_content_from_absence(store):
    await store.put("empty.txt", "")
    change_set = await apply_operations(store, [WriteFile("empty.txt", "x"), WriteFile("new.txt", "y")])

    assert change_set.before["empty.txt"] == Present("")
    assert change_set.before["new.txt"] is Absent

    await revert_change_set(store, change_set)
    assert await _contents(store) == {"empty.txt": ""}


@pytest.mark.asyncio
async def test_delete_of_missing_path_is_noop(store):
    await store.put("y.ts", "let b=2;")
    await apply_operations(store, [DeleteFile("ghost.ts")])
    assert await _contents(store) == {"y.ts": "let b=2;"}


@pytest.mark.asyncio
async def test_paths_outside_batch_are_untouched(store):
    await store.put("outside.txt", "O")
    await store.put("a", "A")
    outside_before = await store.get("outside.txt")

    change_set = await apply_operations(store, [WriteFile("a", "A1"), WriteFile("b", "B1")])
    await revert_change_set(store, change_set)

    assert await store.get("outside.txt") == outside_before
    assert await _contents(store) == {"a": "A", "outside.txt": "O"}


@pytest.mark.asyncio
async def test_revert_is_idempotent(store):
    await store.put("a", "A")
    change_set = await apply_operations(store, [WriteFile("a", "A1"), WriteFile("b", "B1")])

    await revert_change_set(store, change_set)
    await revert_change_set(store, change_set)
    assert await _contents(store) == {"a": "A"}


@pytest.mark.asyncio
async def test_revert_of_stale_change_set_overwrites_later_edits(store):
    await store.put("a", "A")
    change_set = await apply_operations(store, [WriteFile("a", "A1")])
    await store.put("a", "user edit")

    await revert_change_set(store, change_set)
    assert (await store.get("a")).content == "A"


@pytest.mark.asyncio
async def test_failure_mid_batch_keeps_earlier_operations(store):
    failing = _FailingPutStore(store, failing_path="b")

    with pytest.raises(OSError, match="write rejected"):
        await apply_operations(failing, [WriteFile("a", "A1"), WriteFile("b", "B1"), WriteFile("c", "C1")])

    assert await _contents(store) == {"a": "A1"}


@pytest.mark.asyncio
async def test_change_set_keeps_operations_in_input_order(store):
    batch = [WriteFile("b", "1"), DeleteFile("a"), WriteFile("c", "2")]
    change_set = await apply_operations(store, batch)
    assert change_set.operations == tuple(batch)
    assert change_set.paths == ["b", "a", "c"]


@pytest.mark.asyncio
async def test_concrete_scenario(store):
    engine = ChangeSetEngine(store)

    await engine.apply([WriteFile("x.ts", "let a=1;"), WriteFile("y.ts", "let b=2;")])
    assert await _contents(store) == {"x.ts": "let a=1;", "y.ts": "let b=2;"}

    change_set = await engine.apply([DeleteFile("x.ts")])
    assert await _contents(store) == {"y.ts": "let b=2;"}

    await engine.revert(change_set)
    assert await _contents(store) == {"x.ts": "let a=1;", "y.ts": "let b=2;"}
