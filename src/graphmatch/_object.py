"""ObjectMatcher — a composite built on the fly, without a subclass.

    >>> matcher = an_object("an Account").has("owner", "bob").has("balance", 100)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from hamcrest.core.helpers.wrap_matcher import wrap_matcher

from graphmatch._composite import CompositePropertyMatcher
from graphmatch._property import PropertyMatcher
from graphmatch._reflecting import structurally_equal_to

if TYPE_CHECKING:
    from hamcrest.core.matcher import Matcher


class ObjectMatcher[T](CompositePropertyMatcher[T]):
    """Composite whose property matchers are created by has().

    Properties are described and matched in the order they were first named.
    Naming a property again replaces its matcher.
    """

    def has(self, name: str, value: Matcher[Any] | Any) -> Self:
        """Require property ``name`` to match ``value``.

        Plain values are compared with equality; matchers are used as-is.
        """
        self._property(name).set_matcher(wrap_matcher(value))
        return self

    def has_like(self, name: str, value: Any) -> Self:
        """Require property ``name`` to be structurally equal to ``value``."""
        self._property(name).set_matcher(structurally_equal_to(value))
        return self

    def _property(self, name: str) -> PropertyMatcher[Any]:
        for existing in self._property_matchers:
            if existing.property_name == name:
                return existing
        pm: PropertyMatcher[Any] = PropertyMatcher(name)
        self.register(pm)
        return pm


def an_object(
    label: str = "an object", expected_type: type | tuple[type, ...] | None = None
) -> ObjectMatcher[Any]:
    """Start an ObjectMatcher with the given label.

    With no properties named it matches any candidate, except None, which
    always fails with ``was <None>``. Pass ``expected_type`` to narrow the
    accepted candidates further.
    """
    return ObjectMatcher(label, expected_type)
