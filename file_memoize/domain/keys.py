"""Lookup key derivation.

A single positional ``str`` argument is used verbatim as the key. Every other
call shape is keyed by compact, key-sorted JSON of its arguments, so
``f("a")`` and ``f(["a"])`` land on different keys (``a`` vs ``[["a"]]``).
"""

import json
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic_core import PydanticSerializationError, to_jsonable_python

from file_memoize.domain.exceptions import CodecError


def derive_lookup_key(args: Sequence[Any], kwargs: Mapping[str, Any] | None = None) -> str:
    """
    Derive the cache lookup key for a call.

    Args:
        args: Positional arguments of the call
        kwargs: Keyword arguments of the call

    Returns:
        The lookup key

    Raises:
        CodecError: If an argument has no JSON representation

    Example:
        >>> derive_lookup_key(("param1",))
        'param1'
        >>> derive_lookup_key(({"foo": "bar"},))
        '[{"foo":"bar"}]'
        >>> derive_lookup_key((1, 2), {"scale": 3})
        '{"args":[1,2],"kwargs":{"scale":3}}'
    """
    if not kwargs and len(args) == 1 and isinstance(args[0], str):
        return args[0]

    payload: Any = list(args)
    if kwargs:
        payload = {"args": list(args), "kwargs": dict(kwargs)}

    try:
        return json.dumps(
            to_jsonable_python(payload),
            separators=(",", ":"),
            sort_keys=True,
            ensure_ascii=False,
        )
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise CodecError(f"Cannot derive lookup key from call arguments: {e}") from e
