"""Tests for AsyncFileStore.

Tests cover:
- Loading missing, corrupt and valid files
- Full-overwrite saves and parent directory creation
- Atomic writes and cleanup on failure
"""

import asyncio
import json
import logging
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from file_memoize.application.memoizer import FileMemoizer
from file_memoize.domain.exceptions import CodecError
from file_memoize.infrastructure.cache import AsyncFileStore, JsonCodec


class TestAsyncFileStoreLoad:
    """Test reading the backing file."""

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path: Path) -> None:
        store = AsyncFileStore(tmp_path / "missing.json", JsonCodec())
        assert await store.load() == {}

    @pytest.mark.asyncio
    async def test_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.json"
        path.write_text(json.dumps({"a": 1, "b": [2]}))

        store = AsyncFileStore(path, JsonCodec())

        assert await store.load() == {"a": 1, "b": [2]}

    @pytest.mark.asyncio
    async def test_corrupt_file(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Test corrupt content is logged and read as empty."""
        path = tmp_path / "cache.json"
        path.write_text("not a json")

        with caplog.at_level(logging.WARNING, logger="file_memoize"):
            entries = await AsyncFileStore(path, JsonCodec()).load()

        assert entries == {}
        assert "Ignoring unreadable cache file" in caplog.text

    @pytest.mark.asyncio
    async def test_unreadable_path(self, tmp_path: Path) -> None:
        """Test a directory at the cache location reads as empty."""
        assert await AsyncFileStore(tmp_path, JsonCodec()).load() == {}


class TestAsyncFileStoreSave:
    """Test writing the backing file."""

    @pytest.mark.asyncio
    async def test_save_then_load(self, tmp_path: Path) -> None:
        store = AsyncFileStore(tmp_path / "cache.json", JsonCodec())

        await store.save({"key": "value"})

        assert await store.load() == {"key": "value"}

    @pytest.mark.asyncio
    async def test_save_overwrites(self, tmp_path: Path) -> None:
        """Test save replaces the whole file rather than appending."""
        store = AsyncFileStore(tmp_path / "cache.json", JsonCodec())

        await store.save({"a": 1, "b": 2})
        await store.save({"c": 3})

        assert await store.load() == {"c": 3}

    @pytest.mark.asyncio
    async def test_save_creates_parent_directories(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "cache" / "store.json"
        assert not path.parent.exists()

        await AsyncFileStore(path, JsonCodec()).save({"a": 1})

        assert json.loads(path.read_text()) == {"a": 1}

    @pytest.mark.asyncio
    async def test_encode_failure_leaves_file_untouched(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.json"
        path.write_text('{"old": true}')

        with pytest.raises(CodecError):
            await AsyncFileStore(path, JsonCodec()).save({"bad": object()})

        assert path.read_text() == '{"old": true}'

    @pytest.mark.asyncio
    async def test_write_error_propagates(self, tmp_path: Path) -> None:
        with pytest.raises(IsADirectoryError):
            await AsyncFileStore(tmp_path, JsonCodec()).save({"a": 1})


class TestAsyncFileStoreAtomicWrite:
    """Test temp file + rename writes."""

    @pytest.mark.asyncio
    async def test_atomic_save(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.json"
        path.write_text('{"old": true}')
        store = AsyncFileStore(path, JsonCodec(), atomic_write=True)

        await store.save({"new": True})

        assert await store.load() == {"new": True}
        assert list(tmp_path.iterdir()) == [path]

    @pytest.mark.asyncio
    async def test_rename_failure_cleans_up(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test a failed rename removes the temp file and keeps the original."""
        path = tmp_path / "cache.json"
        path.write_text('{"old": true}')
        monkeypatch.setattr("aiofiles.os.replace", AsyncMock(side_effect=OSError("rename failed")))

        with pytest.raises(OSError, match="rename failed"):
            await AsyncFileStore(path, JsonCodec(), atomic_write=True).save({"new": True})

        assert list(tmp_path.iterdir()) == [path]
        assert path.read_text() == '{"old": true}'

    @pytest.mark.asyncio
    async def test_overlapping_saves(self, tmp_path: Path) -> None:
        """Test concurrent atomic saves each use their own temp file."""
        path = tmp_path / "cache.json"
        store = AsyncFileStore(path, JsonCodec(), atomic_write=True)
        snapshots = [{f"k{i}": i} for i in range(20)]

        results = await asyncio.gather(
            *[store.save(entries) for entries in snapshots], return_exceptions=True
        )

        assert results == [None] * 20
        assert await store.load() in snapshots
        assert list(tmp_path.iterdir()) == [path]

    @pytest.mark.asyncio
    async def test_overlapping_misses(self, tmp_path: Path) -> None:
        """Test concurrent misses with atomic writes all succeed."""
        path = tmp_path / "cache.json"

        async def compute(param: str) -> str:
            await asyncio.sleep(0)
            return f"Result for {param}"

        memoizer = FileMemoizer(compute, "compute", lambda: path, atomic_write=True)
        await memoizer("warmup")

        results = await asyncio.gather(
            *[memoizer(f"p{i}") for i in range(20)], return_exceptions=True
        )

        assert results == [f"Result for p{i}" for i in range(20)]
        stored = json.loads(path.read_text())
        assert "warmup" in stored
        assert set(stored) <= {"warmup", *(f"p{i}" for i in range(20))}
        assert list(tmp_path.iterdir()) == [path]
