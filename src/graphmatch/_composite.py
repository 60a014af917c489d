"""CompositePropertyMatcher — matches a whole object, property by property.

Two phases:
- Wiring: property matchers are constructed, then handed to register(),
  which makes this composite their PathProvider. Fluent ``has_<property>``
  calls configure them.
- Evaluation: every matches() / describe_mismatch() call builds a fresh
  MatchAccumulator and walks the registered property matchers in
  registration order. matches() only keeps verdicts; describe_mismatch()
  renders text and takes nested verdicts quietly, so each level is visited
  a bounded number of times. The first evaluation freezes registration.

Reconfiguring a tree while another thread evaluates it is the caller's
responsibility; nothing here locks.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar, Self

from hamcrest.core.base_matcher import BaseMatcher

from graphmatch._accumulator import MISMATCH_SEPARATOR, MatchAccumulator
from graphmatch._property import MatcherError, describe_wrong_type

if TYPE_CHECKING:
    from hamcrest.core.description import Description

    from graphmatch._property import PropertyMatcher
    from graphmatch._types import PathProvider


class _Missing:
    """Stand-in value for a property the candidate does not have."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<missing>"


MISSING: Any = _Missing()


class CompositePropertyMatcher[T](BaseMatcher[T]):
    """Matcher for an object made of named properties.

    Subclasses declare one PropertyMatcher per property, pass them to
    register(), and expose fluent ``has_<property>`` methods. Property values
    are read by attribute (or by key for mappings); override
    ``property_value`` or ``_match_properties`` for anything else.

    Args:
        label: Human-readable description of the matched thing, e.g. "a Transfer".
        expected_type: Candidates not an instance of this type (or tuple of
            types) fail with a top-level mismatch. None accepts any non-None
            candidate.
    """

    describes_own_path: ClassVar[bool] = True

    def __init__(
        self,
        label: str,
        expected_type: type | tuple[type, ...] | None = None,
    ) -> None:
        self._label = label
        self._expected_type = expected_type
        self._property_matchers: list[PropertyMatcher[Any]] = []
        self._path_provider: PathProvider | None = None
        self._frozen = False

    @property
    def label(self) -> str:
        return self._label

    @property
    def property_matchers(self) -> tuple[PropertyMatcher[Any], ...]:
        return tuple(self._property_matchers)

    def register(self, *property_matchers: PropertyMatcher[Any]) -> Self:
        """Take ownership of property matchers, in description order.

        Raises:
            MatcherError: If called after the first evaluation, if a property
                name is already registered, or if a property matcher belongs
                to another composite.
        """
        if self._frozen:
            msg = f"cannot register property matchers on {self._label!r} after first use"
            raise MatcherError(msg)
        names = {pm.property_name for pm in self._property_matchers}
        for pm in property_matchers:
            if pm.property_name in names:
                msg = f"property {pm.property_name!r} already registered on {self._label!r}"
                raise MatcherError(msg)
            if pm.path_provider is not None and pm.path_provider is not self:
                msg = f"property {pm.property_name!r} is owned by another matcher"
                raise MatcherError(msg)
            pm.set_path_provider(self)
            self._property_matchers.append(pm)
            names.add(pm.property_name)
        return self

    # ── PathProvider / PathAware ───────────────────────────────────────────

    def set_path_provider(self, provider: PathProvider | None) -> None:
        self._path_provider = provider

    def get_path(self) -> str:
        """Path of the object this composite matches; empty at the root."""
        if self._path_provider is None:
            return ""
        return self._path_provider.get_path()

    # ── Evaluation ─────────────────────────────────────────────────────────

    def property_value(self, item: Any, name: str) -> Any:
        """Read one property from the candidate. Never mutates it."""
        if isinstance(item, Mapping):
            return item.get(name, MISSING)
        return getattr(item, name, MISSING)

    def _match_properties(self, item: T, accumulator: MatchAccumulator) -> None:
        """Record every specified property of ``item`` on the accumulator."""
        for pm in self._property_matchers:
            if pm.is_specified:
                accumulator.record_match(pm, self.property_value(item, pm.property_name))

    def _accepts(self, item: Any) -> bool:
        if item is None:
            return False
        return self._expected_type is None or isinstance(item, self._expected_type)

    def _accumulate(self, item: T, *, describe: bool, quiet: bool) -> MatchAccumulator:
        self._frozen = True
        accumulator = MatchAccumulator(describe=describe, quiet=quiet)
        self._match_properties(item, accumulator)
        return accumulator

    def _matches(self, item: Any) -> bool:
        self._frozen = True
        if not self._accepts(item):
            return False
        return self._accumulate(item, describe=False, quiet=False).matched

    def verdict(self, item: Any) -> bool:
        """Same result as matches(), without side-channel reporting.

        Used for nested composites while an enclosing mismatch is described.
        """
        self._frozen = True
        if not self._accepts(item):
            return False
        return self._accumulate(item, describe=False, quiet=True).matched

    # ── Descriptions ───────────────────────────────────────────────────────

    def describe_to(self, description: Description) -> None:
        description.append_text(self._label)
        specified = [pm for pm in self._property_matchers if pm.is_specified]
        if specified:
            description.append_list(" (", MISMATCH_SEPARATOR, ")", specified)

    def describe_mismatch(self, item: Any, mismatch_description: Description) -> None:
        if self._accepts(item):
            accumulator = self._accumulate(item, describe=True, quiet=True)
            mismatch_description.append_text(accumulator.mismatch_text)
            return

        path = self.get_path()
        if path:
            mismatch_description.append_text(path).append_text(" ")
        describe_wrong_type(item, mismatch_description)

    def __repr__(self) -> str:
        names = ", ".join(pm.property_name for pm in self._property_matchers)
        return f"{type(self).__name__}({self._label!r}, properties=[{names}])"
