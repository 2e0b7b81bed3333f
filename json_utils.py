"""
JSON helpers backed by orjson
=============================

Mirrors the dumps/loads names of the standard json module so callers can
``import json_utils as json``. orjson works on bytes; these helpers return str.
"""

import orjson
from typing import Any, Callable, Optional


def dumps(
    obj: Any,
    indent: Optional[int] = None,
    sort_keys: bool = False,
    default: Optional[Callable[[Any], Any]] = None,
) -> str:
    """
    Serialize obj to a JSON string.

    Non-ASCII characters are always emitted as UTF-8, never escaped.

    Args:
        obj: Object to serialize
        indent: Any value pretty-prints with two-space indentation (orjson's only indent)
        sort_keys: Sort dictionary keys
        default: Callable for objects orjson cannot serialize natively

    Returns:
        JSON string
    """
    option = 0
    if indent is not None:
        option |= orjson.OPT_INDENT_2
    if sort_keys:
        option |= orjson.OPT_SORT_KEYS
    return orjson.dumps(obj, default=default, option=option).decode("utf-8")


def loads(s: str) -> Any:
    return orjson.loads(s)


JSONDecodeError = orjson.JSONDecodeError
