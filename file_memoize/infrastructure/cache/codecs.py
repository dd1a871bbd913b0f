"""
Store codecs for the backing file.

JsonCodec is the default and produces the human-readable format CI jobs share:
a single JSON object, indented by two spaces, mapping lookup keys to results.
PickleCodec is available for results that have no JSON form.
"""

import json
import pickle
from collections.abc import Mapping
from typing import Any

from pydantic_core import PydanticSerializationError, to_jsonable_python

from file_memoize.domain.exceptions import CodecError


def _check_store(value: Any, source: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise CodecError(f"{source} does not hold a mapping (got {type(value).__name__})")
    if not all(isinstance(key, str) for key in value):
        raise CodecError(f"{source} holds non-string keys")
    return value


class JsonCodec:
    """UTF-8 JSON object codec.

    Values are converted with pydantic_core.to_jsonable_python, so pydantic
    models, dataclasses and datetimes are stored in their JSON form and come
    back as plain JSON values.
    """

    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def encode(self, entries: Mapping[str, Any]) -> bytes:
        try:
            text = json.dumps(to_jsonable_python(dict(entries)), indent=self.indent, ensure_ascii=False)
        except (PydanticSerializationError, TypeError, ValueError) as e:
            raise CodecError(f"Cache store is not JSON serializable: {e}") from e
        return text.encode("utf-8")

    def decode(self, data: bytes) -> dict[str, Any]:
        try:
            value = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CodecError(f"Cache file is not valid JSON: {e}") from e
        return _check_store(value, "JSON cache file")


class PickleCodec:
    """Pickle codec for stores whose values have no JSON form.

    Only load pickle cache files this process or a trusted job wrote.
    """

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL) -> None:
        self.protocol = protocol

    def encode(self, entries: Mapping[str, Any]) -> bytes:
        try:
            return pickle.dumps(dict(entries), protocol=self.protocol)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            raise CodecError(f"Cache store is not picklable: {e}") from e

    def decode(self, data: bytes) -> dict[str, Any]:
        try:
            value = pickle.loads(data)
        except Exception as e:
            # Unpickling garbage can raise nearly anything
            raise CodecError(f"Cache file is not a valid pickle: {e}") from e
        return _check_store(value, "Pickle cache file")
