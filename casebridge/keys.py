"""
Recursive key conversion over nested dicts, lists and tuples.
Records (dataclasses, pydantic models, named tuples) and every other non-container value
are returned as-is; only dict keys that are strings or Symbols are renamed.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, Iterator

from pydantic import BaseModel

from casebridge.case import Symbol, camel_to_snake, snake_to_camel

KeyFunction = Callable[[Any], Any]


def is_record(value: Any) -> bool:
    """
    True for field-bearing values that would otherwise look like containers (named tuples)
    or carry their own field names (dataclasses, pydantic models).

    This is not the whole opaqueness rule: dates, uploads and other non-container objects are
    never records, they are left alone because convert_map_keys only enters dicts, lists and tuples.
    """
    if isinstance(value, type):
        return False
    return (
        isinstance(value, BaseModel)
        or dataclasses.is_dataclass(value)
        or (isinstance(value, tuple) and hasattr(value, "_fields"))
    )


def _is_container(value: Any) -> bool:
    return isinstance(value, (dict, list, tuple)) and not is_record(value)


class _Frame:
    """One container being rebuilt; children are pulled lazily from `items`."""

    __slots__ = ("source", "items", "out", "slot")

    def __init__(self, source: Any, slot: Any = None):
        self.source = source
        self.slot = slot
        if isinstance(source, dict):
            self.items: Iterator[tuple[Any, Any]] = iter(source.items())
            self.out: Any = {}
        else:
            self.items = ((None, v) for v in source)
            self.out = []

    def add(self, key: Any, value: Any, conversion_function: KeyFunction) -> None:
        if isinstance(self.out, dict):
            if isinstance(key, (str, Symbol)):
                key = conversion_function(key)
            # colliding converted keys: last one wins
            self.out[key] = value
        else:
            self.out.append(value)

    def close(self) -> Any:
        if isinstance(self.source, tuple):
            return tuple(self.out)
        return self.out


def convert_map_keys(data: Any, conversion_function: KeyFunction) -> Any:
    """
    Rebuild `data` with every dict key passed through `conversion_function`.

    Only str and Symbol keys are converted; other keys and all non-container values are kept.
    Uses an explicit stack, so nesting depth is not limited by the interpreter recursion limit.

        >>> convert_map_keys({"user_info": {"first_name": "John"}}, snake_to_camel)
        {'userInfo': {'firstName': 'John'}}
    """
    if not _is_container(data):
        return data

    stack = [_Frame(data)]
    while True:
        frame = stack[-1]
        for key, value in frame.items:
            if _is_container(value):
                stack.append(_Frame(value, key))
                break
            frame.add(key, value, conversion_function)
        else:
            stack.pop()
            result = frame.close()
            if not stack:
                return result
            stack[-1].add(frame.slot, result, conversion_function)


def dict_keys_to_camel(obj: Any) -> Any:
    """Recursively convert dict keys from snake_case to camelCase for API responses."""
    return convert_map_keys(obj, snake_to_camel)


def dict_keys_to_snake(obj: Any) -> Any:
    """Recursively convert dict keys from camelCase to snake_case for API input normalization."""
    return convert_map_keys(obj, camel_to_snake)
