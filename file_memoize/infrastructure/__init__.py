"""
Infrastructure layer module.

This module contains the concrete storage used by the memoizer: codecs that
turn a cache store into bytes and the aiofiles-backed file store.

Key components:
- cache/codecs.py: JSON and pickle store codecs
- cache/file_store.py: Async backing-file reader/writer
"""
