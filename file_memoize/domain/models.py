"""Domain models for the memoizing wrapper."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LoadState(str, Enum):
    """Lifecycle of a memoizer's in-memory store.

    UNLOADED is the initial state, LOADING is entered by the first call and
    LOADED is terminal for the lifetime of the memoizer.
    """

    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"


class CacheStats(BaseModel):
    """Snapshot of a memoizer's counters."""

    cache_path: str = Field(description="Resolved backing-file location")
    state: LoadState = Field(description="Load state at snapshot time")
    entries: int = Field(ge=0, description="Entries in the in-memory store")
    hits: int = Field(ge=0, description="Calls answered from the store")
    misses: int = Field(ge=0, description="Calls that invoked the wrapped function")

    model_config = ConfigDict(frozen=True)
