"""MatchAccumulator — merges per-property results for one match pass.

Unlike ``all()``, the accumulator evaluates every property even after a
failure, so one failed assertion reports every mismatched property.

Two kinds of pass use it:
- a verdict pass (``describe=False``) from ``matches()``, which only keeps
  the overall verdict and renders no text;
- a describe pass (the default) from ``describe_mismatch()``, which renders
  one fragment per failing property.

A quiet accumulator asks each property for its verdict through
``PropertyMatcher.verdict`` so nested diagnosing matchers do not report a
failure that has already been reported by the ``matches()`` call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Self

from hamcrest.core.string_description import StringDescription

if TYPE_CHECKING:
    from graphmatch._property import PropertyMatcher

MISMATCH_SEPARATOR = " and "


class MatchAccumulator:
    """Collects verdicts and mismatch fragments for a single match pass.

    Transient: create one per ``matches`` / ``describe_mismatch`` call and
    never share it across calls or threads.

    Args:
        describe: Render a mismatch fragment for every failing property.
        quiet: Take verdicts without triggering side-channel reporting.

    >>> acc = MatchAccumulator()
    >>> acc.matched
    True
    """

    __slots__ = ("_describe", "_fragments", "_matched", "_quiet")

    def __init__(self, *, describe: bool = True, quiet: bool = True) -> None:
        self._describe = describe
        self._quiet = quiet
        self._matched = True
        self._fragments: list[str] = []

    def record_match(self, property_matcher: PropertyMatcher[Any], value: Any) -> Self:
        """Evaluate one property matcher against its property value.

        A failure clears the overall verdict and, in a describe pass, records
        the property's mismatch description. Returns self for chaining.
        """
        if self._quiet:
            matched = property_matcher.verdict(value)
        else:
            matched = property_matcher.matches(value)
        if not matched:
            self._matched = False
            if self._describe:
                description = StringDescription()
                property_matcher.describe_mismatch(value, description)
                self._fragments.append(str(description))
        return self

    @property
    def matched(self) -> bool:
        return self._matched

    @property
    def fragments(self) -> tuple[str, ...]:
        return tuple(self._fragments)

    @property
    def mismatch_text(self) -> str:
        """Mismatch fragments joined with " and "; empty if everything matched."""
        return MISMATCH_SEPARATOR.join(self._fragments)
