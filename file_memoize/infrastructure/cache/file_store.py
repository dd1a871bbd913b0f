"""
Async backing-file store.

Reads and writes the whole cache store as a single file with aiofiles, so
file I/O never blocks the event loop. There is no locking: concurrent writers
race and the last full overwrite wins.
"""

import logging
import os
import uuid
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from file_memoize.domain.exceptions import CodecError
from file_memoize.domain.protocols import StoreCodec

logger = logging.getLogger(__name__)


class AsyncFileStore:
    """
    Single-file persistence for a cache store.

    Features:
    - Async file I/O via aiofiles (no event loop blocking)
    - Pluggable codec (JSON by default in the memoizer)
    - Tolerant loading: missing or corrupt files read as an empty store
    - Optional atomic writes (temp file + rename)
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        codec: StoreCodec,
        atomic_write: bool = False,
    ) -> None:
        """
        Initialize file store.

        Args:
            path: Backing-file location
            codec: Codec used to encode/decode the whole store
            atomic_write: Write to a temp file and rename it over the target
        """
        self.path = Path(path)
        self.codec = codec
        self.atomic_write = atomic_write

    async def load(self) -> dict[str, Any]:
        """
        Read the store from the backing file.

        Returns:
            Decoded store, or an empty dict if the file is missing,
            unreadable or does not decode to a store
        """
        try:
            async with aiofiles.open(self.path, "rb") as f:
                data = await f.read()
        except FileNotFoundError:
            logger.debug(f"Cache file {self.path} not found, starting empty")
            return {}
        except OSError as e:
            logger.warning(f"Failed to read cache file {self.path}: {e}")
            return {}

        try:
            entries = self.codec.decode(data)
        except CodecError as e:
            logger.warning(f"Ignoring unreadable cache file {self.path}: {e}")
            return {}

        logger.debug(f"Loaded {len(entries)} cache entries from {self.path}")
        return entries

    async def save(self, entries: Mapping[str, Any]) -> None:
        """
        Overwrite the backing file with the full store.

        Args:
            entries: Store to persist

        Raises:
            CodecError: If the store cannot be encoded
            OSError: If the file cannot be written (propagated unchanged)
        """
        data = self.codec.encode(entries)
        self.path.parent.mkdir(parents=True, exist_ok=True)

        if self.atomic_write:
            await self._atomic_write(data)
        else:
            async with aiofiles.open(self.path, "wb") as f:
                await f.write(data)

        logger.debug(f"Wrote {len(entries)} cache entries to {self.path} ({len(data)} bytes)")

    async def _atomic_write(self, data: bytes) -> None:
        """
        Write data to a sibling temp file, then rename it over the target.

        Args:
            data: File contents
        """
        # Unique per write; overlapping misses must not share a temp file
        temp_path = self.path.with_name(f"{self.path.name}.{os.getpid()}.{uuid.uuid4().hex}.tmp")
        try:
            async with aiofiles.open(temp_path, "wb") as f:
                await f.write(data)
            await aiofiles.os.replace(temp_path, self.path)
        except BaseException:
            if temp_path.exists():
                try:
                    await aiofiles.os.remove(temp_path)
                except OSError as cleanup_error:
                    logger.debug(f"Failed to remove temp file {temp_path}: {cleanup_error}")
            raise
