"""Structural equality leaves.

ReflectingPropertyMatcher covers a property, typically a container, without
a dedicated composite matcher class: it compares the actual value with an
expected value field by field and renders both generically.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from hamcrest.core.base_matcher import BaseMatcher

from graphmatch._property import PropertyMatcher

if TYPE_CHECKING:
    from hamcrest.core.description import Description


def _is_plain_object(value: Any) -> bool:
    """True for instances that carry state in __dict__ but define no __eq__."""
    return (
        hasattr(value, "__dict__")
        and not isinstance(value, type)
        and type(value).__eq__ is object.__eq__
    )


def structurally_equal(actual: Any, expected: Any) -> bool:
    """Compare two values by structure rather than identity.

    Mappings compare by keys and values, lists and tuples element by
    element, sets and frozensets by pairing up equal elements, dataclasses and
    plain objects attribute by attribute. Anything else falls back to ``==``.
    """
    return _equal(actual, expected, set())


def _equal(actual: Any, expected: Any, seen: set[tuple[int, int]]) -> bool:
    if actual is expected:
        return True
    key = (id(actual), id(expected))
    if key in seen:
        return True
    if isinstance(expected, Mapping):
        if not isinstance(actual, Mapping) or actual.keys() != expected.keys():
            return False
        seen.add(key)
        return all(_equal(actual[k], expected[k], seen) for k in expected)
    if isinstance(expected, (str, bytes)):
        return actual == expected
    if isinstance(expected, (set, frozenset)):
        if type(actual) is not type(expected) or len(actual) != len(expected):
            return False
        if actual == expected:
            return True
        seen.add(key)
        return _equal_unordered(list(actual), list(expected), seen)
    if isinstance(expected, (list, tuple)):
        if type(actual) is not type(expected) or len(actual) != len(expected):
            return False
        seen.add(key)
        return all(_equal(a, e, seen) for a, e in zip(actual, expected, strict=True))
    if dataclasses.is_dataclass(expected) and not isinstance(expected, type):
        if type(actual) is not type(expected):
            return False
        seen.add(key)
        return all(
            _equal(getattr(actual, f.name), getattr(expected, f.name), seen)
            for f in dataclasses.fields(expected)
            if f.compare
        )
    if _is_plain_object(expected):
        if type(actual) is not type(expected):
            return False
        seen.add(key)
        return _equal(vars(actual), vars(expected), seen)
    return bool(actual == expected)


def _equal_unordered(actual: list[Any], expected: list[Any], seen: set[tuple[int, int]]) -> bool:
    """Pair every expected element with a distinct, structurally equal actual one."""
    unused = list(actual)
    for e in expected:
        for i, a in enumerate(unused):
            if _equal(a, e, set(seen)):
                del unused[i]
                break
        else:
            return False
    return True


def describe_value(value: Any) -> str:
    """Render a value for humans, expanding containers and plain objects.

    >>> describe_value({"a": [1, 2]})
    "{'a': [1, 2]}"
    """
    return _render(value, set())


def _render(value: Any, seen: set[int]) -> str:
    if id(value) in seen:
        return "..."
    if isinstance(value, (Mapping, list, tuple, set, frozenset)) or (
        dataclasses.is_dataclass(value) and not isinstance(value, type)
    ) or (_is_plain_object(value) and type(value).__repr__ is object.__repr__):
        seen.add(id(value))
        try:
            return _render_container(value, seen)
        finally:
            seen.discard(id(value))
    return repr(value)


def _render_container(value: Any, seen: set[int]) -> str:
    if isinstance(value, Mapping):
        items = ", ".join(f"{_render(k, seen)}: {_render(v, seen)}" for k, v in value.items())
        return "{" + items + "}"
    if isinstance(value, list):
        return "[" + ", ".join(_render(v, seen) for v in value) + "]"
    if isinstance(value, tuple):
        if len(value) == 1:
            return f"({_render(value[0], seen)},)"
        return "(" + ", ".join(_render(v, seen) for v in value) + ")"
    if isinstance(value, (set, frozenset)):
        items = ", ".join(sorted(_render(v, seen) for v in value))
        if isinstance(value, frozenset):
            return f"frozenset({{{items}}})" if value else "frozenset()"
        return "{" + items + "}" if value else "set()"
    if dataclasses.is_dataclass(value):
        attrs = {f.name: getattr(value, f.name) for f in dataclasses.fields(value) if f.repr}
        return _render_object(value, attrs, seen)
    return _render_object(value, vars(value), seen)


def _render_object(value: Any, attrs: Mapping[str, Any], seen: set[int]) -> str:
    fields = ", ".join(f"{name}={_render(v, seen)}" for name, v in attrs.items())
    return f"{type(value).__name__}({fields})"


class StructurallyEqualMatcher[T](BaseMatcher[T]):
    """Matches values structurally equal to an expected value."""

    def __init__(self, expected: T) -> None:
        self.expected = expected

    def _matches(self, item: Any) -> bool:
        return structurally_equal(item, self.expected)

    def describe_to(self, description: Description) -> None:
        description.append_text(describe_value(self.expected))

    def describe_mismatch(self, item: Any, mismatch_description: Description) -> None:
        mismatch_description.append_text("was ").append_text(describe_value(item))


def structurally_equal_to[T](expected: T) -> StructurallyEqualMatcher[T]:
    """Matches if the item is structurally equal to ``expected``."""
    return StructurallyEqualMatcher(expected)


class ReflectingPropertyMatcher[T](PropertyMatcher[T]):
    """A PropertyMatcher whose inner matcher compares structurally.

    set_expected() captures the expected value; set_matcher() still accepts
    any other matcher when finer control is needed.
    """

    def set_expected(self, expected: T) -> None:
        self.set_matcher(StructurallyEqualMatcher(expected))
