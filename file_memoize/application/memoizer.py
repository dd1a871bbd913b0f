"""
File-backed memoization for async functions.

Results are persisted to a single file so that separate process runs (for
example successive CI jobs of the same build) skip recomputation for arguments
they have already seen.

Usage:
    from file_memoize import file_memoize

    async def fetch_user(user_id: str) -> dict:
        ...

    cached_fetch_user = file_memoize(fetch_user)
    await cached_fetch_user("42")  # computed and written to disk
    await cached_fetch_user("42")  # read from memory
"""

import logging
import os
from collections.abc import Awaitable, Callable
from functools import wraps
from pathlib import Path
from typing import Any, Generic, ParamSpec, TypeVar

from file_memoize.domain.keys import derive_lookup_key
from file_memoize.domain.models import CacheStats, LoadState
from file_memoize.domain.protocols import StoreCodec
from file_memoize.infrastructure.cache import AsyncFileStore, JsonCodec
from file_memoize.shared.config import Settings, default_cache_path

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

LocationProvider = Callable[[], str | os.PathLike[str]]


def _default_identifier(fn: Callable[..., Any]) -> str:
    name = getattr(fn, "__name__", None) or type(fn).__name__
    if name == "<lambda>" or name == type(fn).__name__:
        logger.warning(
            f"file_memoize: {fn!r} has no stable name, using cache identifier {name!r}; "
            "pass cache_identifier to avoid sharing a cache file with other wrappers"
        )
    return name


class FileMemoizer(Generic[P, T]):
    """
    Memoizing wrapper state for one async function.

    Each instance owns a private in-memory store. The backing file is read on
    the first call only and rewritten in full after every miss; later changes
    to the file by other writers are not picked up.
    """

    def __init__(
        self,
        fn: Callable[P, Awaitable[T]],
        cache_identifier: str | None = None,
        location_provider: LocationProvider | None = None,
        *,
        codec: StoreCodec | None = None,
        atomic_write: bool | None = None,
        settings: Settings | None = None,
    ) -> None:
        """
        Initialize the memoizer.

        Args:
            fn: Async, side-effect-free function to memoize
            cache_identifier: Namespace for the default cache file (default: fn.__name__)
            location_provider: Zero-argument callable returning the cache file
                location, evaluated once here
            codec: Store codec (default: JsonCodec)
            atomic_write: Use temp file + rename writes (default: settings.atomic_writes)
            settings: Settings for defaults (default: read from the environment now)
        """
        if settings is None:
            settings = Settings()

        self.fn = fn
        self.cache_identifier = cache_identifier or _default_identifier(fn)

        if location_provider is None:
            cache_path = default_cache_path(self.cache_identifier, settings)
        else:
            cache_path = Path(location_provider())

        self._store = AsyncFileStore(
            cache_path,
            codec if codec is not None else JsonCodec(),
            atomic_write=settings.atomic_writes if atomic_write is None else atomic_write,
        )
        self._cache: dict[str, T] = {}
        self._state = LoadState.UNLOADED
        self._hits = 0
        self._misses = 0

        logger.debug(f"Initialized FileMemoizer: identifier={self.cache_identifier}, path={cache_path}")

    @property
    def cache_path(self) -> Path:
        """Resolved backing-file location."""
        return self._store.path

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def stats(self) -> CacheStats:
        return CacheStats(
            cache_path=str(self.cache_path),
            state=self._state,
            entries=len(self._cache),
            hits=self._hits,
            misses=self._misses,
        )

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: object) -> bool:
        return key in self._cache

    async def _ensure_loaded(self) -> None:
        # Concurrent first calls may each load; whichever finishes last wins
        if self._state is LoadState.LOADED:
            return
        self._state = LoadState.LOADING
        self._cache = await self._store.load()
        self._state = LoadState.LOADED

    async def __call__(self, *args: P.args, **kwargs: P.kwargs) -> T:
        """
        Return the cached result for these arguments, computing it on a miss.

        Raises:
            CodecError: If the arguments or the result have no serialized form
            OSError: If the cache file cannot be written; the computed result
                stays in the in-memory store
            Exception: Anything raised by the wrapped function, unchanged
        """
        await self._ensure_loaded()

        key = derive_lookup_key(args, kwargs)
        if key in self._cache:
            self._hits += 1
            logger.debug(f"Cache hit: {self.cache_identifier}[{key!r}]")
            return self._cache[key]

        self._misses += 1
        logger.debug(f"Cache miss: {self.cache_identifier}[{key!r}]")
        result = await self.fn(*args, **kwargs)

        self._cache[key] = result
        await self._store.save(self._cache)
        return result


def file_memoize(
    fn: Callable[P, Awaitable[T]],
    cache_identifier: str | None = None,
    location_provider: LocationProvider | None = None,
    **options: Any,
) -> Callable[P, Awaitable[T]]:
    """
    Wrap an async function so its results are cached in a file.

    The lookup key is the argument itself when the call has exactly one
    ``str`` argument, and compact JSON of the arguments otherwise.

    Args:
        fn: Async, side-effect-free function to memoize
        cache_identifier: Namespace for the default cache file (default: fn.__name__).
            Pass one explicitly for lambdas and other unnamed callables.
        location_provider: Zero-argument callable returning the cache file
            location (default: <tmpdir>/<CI_COMMIT_SHA or 'default'>_<identifier>.json)
        **options: codec, atomic_write and settings, passed to FileMemoizer

    Returns:
        Async function with fn's signature; ``.memoizer`` and ``.cache_path``
        expose the underlying FileMemoizer

    Example:
        >>> async def square(x: int) -> int:
        ...     return x * x
        >>> cached_square = file_memoize(square, location_provider=lambda: "/tmp/square.json")
        >>> cached_square.cache_path
        PosixPath('/tmp/square.json')
    """
    memoizer = FileMemoizer(fn, cache_identifier, location_provider, **options)

    @wraps(fn)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        return await memoizer(*args, **kwargs)

    wrapper.memoizer = memoizer  # type: ignore[attr-defined]
    wrapper.cache_path = memoizer.cache_path  # type: ignore[attr-defined]
    return wrapper


def memoize_to_file(
    cache_identifier: str | None = None,
    location_provider: LocationProvider | None = None,
    **options: Any,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Decorator form of file_memoize.

    Example:
        >>> @memoize_to_file(cache_identifier="embeddings")
        ... async def embed(text: str) -> list[float]:
        ...     ...
    """

    def decorator(fn: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        return file_memoize(fn, cache_identifier, location_provider, **options)

    return decorator
