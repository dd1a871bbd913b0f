"""Package-level exceptions.

Errors raised by the wrapped computation and I/O errors raised while writing
the backing file are never wrapped; they reach the caller unchanged.
"""


class MemoizeError(Exception):
    """Base exception for all file_memoize errors."""
    pass


class CodecError(MemoizeError):
    """Raised when a cache store or lookup key cannot be encoded or decoded."""
    pass
