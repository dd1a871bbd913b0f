"""Protocol definitions for dependency inversion.

The memoizer only ever sees bytes going to and coming from the backing file;
how a store is turned into those bytes is up to the codec.
"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StoreCodec(Protocol):
    """Protocol for serializing a whole cache store."""

    def encode(self, entries: Mapping[str, Any]) -> bytes:
        """Serialize a store for writing to the backing file.

        Args:
            entries: Mapping of lookup key to cached result

        Returns:
            File contents

        Raises:
            CodecError: If a value cannot be serialized
        """
        ...

    def decode(self, data: bytes) -> dict[str, Any]:
        """Deserialize backing-file contents into a store.

        Args:
            data: Raw file contents

        Returns:
            Mapping of lookup key to cached result

        Raises:
            CodecError: If the contents are not a valid store
        """
        ...
