"""PropertyMatcher — one named property of the object being matched.

A PropertyMatcher binds an optional inner hamcrest matcher to a property
name. With no inner matcher the property is unspecified and always matches,
so a test only states the properties it cares about.

Paths are resolved lazily: the owning composite is installed as the
PathProvider at registration time, and get_path() walks up that chain only
when a mismatch has to be described.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from hamcrest.core.base_matcher import BaseMatcher

if TYPE_CHECKING:
    from hamcrest.core.description import Description
    from hamcrest.core.matcher import Matcher

    from graphmatch._types import PathProvider


class MatcherError(Exception):
    """Errors from matcher tree assembly."""


class PathNotWiredError(MatcherError):
    """A path was requested from a node with no PathProvider assigned."""

    def __init__(self, property_name: str) -> None:
        self.property_name = property_name
        super().__init__(f"no PathProvider assigned to property {property_name!r}")


def join_path(parent: str, name: str) -> str:
    """Dot-join a property name onto its parent path. The root path is empty."""
    return f"{parent}.{name}" if parent else name


def describe_wrong_type(item: Any, mismatch_description: Description) -> None:
    """Describe a value of the wrong type: ``was <None>``, ``was an int (<42>)``."""
    if item is None:
        mismatch_description.append_text("was ").append_description_of(None)
        return
    type_name = type(item).__name__
    article = "an" if type_name[:1].lower() in "aeiou" else "a"
    mismatch_description.append_text(f"was {article} {type_name} (")
    mismatch_description.append_description_of(item).append_text(")")


class PropertyMatcher[T](BaseMatcher[T]):
    """Matches one property of the target object.

    Owned by exactly one CompositePropertyMatcher, which registers it and
    becomes its PathProvider. Configure it with set_matcher(); the owning
    composite's fluent ``has_<property>`` methods are the usual entry point.
    """

    def __init__(
        self, property_name: str, path_provider: PathProvider | None = None
    ) -> None:
        if not isinstance(property_name, str) or not property_name:
            msg = f"property name must be a non-empty string, got {property_name!r}"
            raise ValueError(msg)
        self._property_name = property_name
        self._path_provider = path_provider
        self._matcher: Matcher[Any] | None = None
        self._delegates_mismatch = False

    @property
    def property_name(self) -> str:
        return self._property_name

    @property
    def path_provider(self) -> PathProvider | None:
        return self._path_provider

    def set_path_provider(self, provider: PathProvider | None) -> None:
        """Assign the provider of this property's parent path. Wiring phase only."""
        self._path_provider = provider

    @property
    def matcher(self) -> Matcher[Any] | None:
        return self._matcher

    @property
    def is_specified(self) -> bool:
        return self._matcher is not None

    @property
    def delegates_mismatch(self) -> bool:
        """True if the inner matcher renders its own path in mismatches."""
        return self._delegates_mismatch

    def set_matcher(self, matcher: Matcher[Any] | None) -> None:
        """Set the matcher this property must satisfy.

        None makes the property unspecified again. If the matcher declares
        ``describes_own_path``, this PropertyMatcher becomes its PathProvider.
        """
        self._matcher = matcher
        self._delegates_mismatch = bool(getattr(matcher, "describes_own_path", False))
        if self._delegates_mismatch:
            matcher.set_path_provider(self)  # type: ignore[union-attr]

    def get_path(self) -> str:
        """Full dotted path of this property, e.g. ``latest.from_account.balance``.

        Raises:
            PathNotWiredError: If no PathProvider has been assigned.
        """
        if self._path_provider is None:
            raise PathNotWiredError(self._property_name)
        return join_path(self._path_provider.get_path(), self._property_name)

    def _matches(self, item: Any) -> bool:
        return self._matcher is None or self._matcher.matches(item)

    def verdict(self, item: Any) -> bool:
        """Same result as matches(), without side-channel reporting.

        Composites answer through their own quiet ``verdict``; other inner
        matchers have no side channel and are asked with ``matches``.
        """
        if self._matcher is None:
            return True
        quiet = getattr(self._matcher, "verdict", None) if self._delegates_mismatch else None
        if quiet is not None:
            return bool(quiet(item))
        return self._matcher.matches(item)

    def describe_to(self, description: Description) -> None:
        description.append_text("has ").append_text(self._property_name).append_text(" (")
        if self._matcher is not None:
            description.append_description_of(self._matcher)
        else:
            description.append_text("<any>")
        description.append_text(")")

    def describe_mismatch(self, item: Any, mismatch_description: Description) -> None:
        if self._delegates_mismatch:
            self._matcher.describe_mismatch(item, mismatch_description)  # type: ignore[union-attr]
            return

        mismatch_description.append_text(self.get_path()).append_text(" ")
        if self._matcher is None:
            # Unspecified properties never fail; describe the value anyway.
            super().describe_mismatch(item, mismatch_description)
            return

        self._matcher.describe_mismatch(item, mismatch_description)
        mismatch_description.append_text(" (expected ").append_description_of(
            self._matcher
        ).append_text(")")

    def __repr__(self) -> str:
        return f"PropertyMatcher({self._property_name!r}, matcher={self._matcher!r})"
