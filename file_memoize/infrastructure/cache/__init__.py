"""Cache store infrastructure for file_memoize."""

from .codecs import JsonCodec, PickleCodec
from .file_store import AsyncFileStore

__all__ = ["AsyncFileStore", "JsonCodec", "PickleCodec"]
