
"""
serializer.py
Provides utility functions for serializing game transcripts and events to/from JSON.
Used by the CLI and experiment script to save transcripts that can be verified later.
"""

import dataclasses
import json
from typing import Any


def _default(o: Any):
    if dataclasses.is_dataclass(o) and not isinstance(o, type):
        return dataclasses.asdict(o)
    if isinstance(o, (bytes, bytearray)):
        return o.hex()
    if isinstance(o, (set, frozenset)):
        return sorted(o)
    return getattr(o, '__dict__', str(o))


def dumps(obj: Any, indent=None) -> str:
    """
    Serialize a Python object (including dataclasses and raw key bytes) to a JSON string.
    Args:
        obj: Object to serialize.
        indent: Optional indentation passed to json.dumps.
    Returns:
        str: JSON string.
    """
    return json.dumps(obj, default=_default, indent=indent)


def loads(s: str):
    """
    Deserialize a JSON string to a Python object (dict/list).
    """
    return json.loads(s)


def save_json(obj: Any, path: str) -> str:
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps(obj, indent=2))
    return path


def load_json(path: str):
    with open(path, "r", encoding="utf-8") as f:
        return loads(f.read())
