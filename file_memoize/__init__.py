"""Persist results of async, side-effect-free functions to a file."""

from file_memoize.application.memoizer import FileMemoizer, file_memoize, memoize_to_file
from file_memoize.domain.exceptions import CodecError, MemoizeError
from file_memoize.domain.keys import derive_lookup_key
from file_memoize.domain.models import CacheStats, LoadState
from file_memoize.infrastructure.cache import AsyncFileStore, JsonCodec, PickleCodec
from file_memoize.shared.config import Settings, default_cache_path

__version__ = "0.1.0"

__all__ = [
    "AsyncFileStore",
    "CacheStats",
    "CodecError",
    "FileMemoizer",
    "JsonCodec",
    "LoadState",
    "MemoizeError",
    "PickleCodec",
    "Settings",
    "default_cache_path",
    "derive_lookup_key",
    "file_memoize",
    "memoize_to_file",
]
