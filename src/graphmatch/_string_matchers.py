"""String leaf matchers usable as inner matchers of a PropertyMatcher.

Each matcher is a frozen dataclass and a hamcrest matcher. All of them
return False for non-string input, including None and MISSING, and describe
such input by its type: ``reference was an int (<7>) (expected ...)``.

Regex uses ``google-re2`` for guaranteed linear-time matching. RE2 does not
support backreferences or lookahead/lookbehind because they require
backtracking; patterns using them are rejected at construction time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import re2
from hamcrest.core.base_matcher import BaseMatcher

from graphmatch._composite import MISSING
from graphmatch._property import MatcherError, describe_wrong_type

if TYPE_CHECKING:
    from hamcrest.core.description import Description


class StringMatcher(BaseMatcher[str]):
    """Base for leaves that test a string property value.

    Subclasses implement ``_test`` on the candidate string and
    ``_describe_operation`` for the expectation text. ``_fold`` applies the
    ``ignore_case`` setting to either side of a comparison.
    """

    ignore_case: bool

    def _fold(self, text: str) -> str:
        return text.casefold() if self.ignore_case else text

    def _test(self, text: str) -> bool:
        raise NotImplementedError

    def _describe_operation(self, description: Description) -> None:
        raise NotImplementedError

    def _matches(self, item: Any) -> bool:
        return isinstance(item, str) and self._test(item)

    def describe_to(self, description: Description) -> None:
        self._describe_operation(description)
        if self.ignore_case:
            description.append_text(" ignoring case")

    def describe_mismatch(self, item: Any, mismatch_description: Description) -> None:
        if isinstance(item, str) or item is MISSING:
            super().describe_mismatch(item, mismatch_description)
        else:
            describe_wrong_type(item, mismatch_description)


@dataclass(frozen=True, slots=True)
class ExactMatcher(StringMatcher):
    """Whole-string equality, e.g. an account owner's name."""

    value: str
    ignore_case: bool = False
    _cmp: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_cmp", self._fold(self.value))

    def _test(self, text: str) -> bool:
        return self._fold(text) == self._cmp

    def _describe_operation(self, description: Description) -> None:
        description.append_description_of(self.value)


@dataclass(frozen=True, slots=True)
class PrefixMatcher(StringMatcher):
    """String starts with ``prefix``, e.g. a transfer reference ``TX-``."""

    prefix: str
    ignore_case: bool = False
    _cmp: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_cmp", self._fold(self.prefix))

    def _test(self, text: str) -> bool:
        return self._fold(text).startswith(self._cmp)

    def _describe_operation(self, description: Description) -> None:
        description.append_text("a string starting with ").append_description_of(self.prefix)


@dataclass(frozen=True, slots=True)
class SuffixMatcher(StringMatcher):
    """String ends with ``suffix``."""

    suffix: str
    ignore_case: bool = False
    _cmp: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_cmp", self._fold(self.suffix))

    def _test(self, text: str) -> bool:
        return self._fold(text).endswith(self._cmp)

    def _describe_operation(self, description: Description) -> None:
        description.append_text("a string ending with ").append_description_of(self.suffix)


@dataclass(frozen=True, slots=True)
class ContainsMatcher(StringMatcher):
    """Substring search. An empty substring matches every string."""

    substring: str
    ignore_case: bool = False
    _cmp: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_cmp", self._fold(self.substring))

    def _test(self, text: str) -> bool:
        return self._cmp in self._fold(text)

    def _describe_operation(self, description: Description) -> None:
        description.append_text("a string containing ").append_description_of(self.substring)


@dataclass(frozen=True, slots=True)
class RegexMatcher(StringMatcher):
    """Regular expression search.

    Uses search (not fullmatch), so the pattern may match anywhere in the
    string. Anchor with ``^``/``$`` for whole-string matches. With
    ignore_case the pattern is compiled case-insensitively; the input is
    never folded.

    Raises:
        MatcherError: If the pattern is not valid RE2 syntax.
    """

    pattern: str
    ignore_case: bool = False
    _compiled: re2.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        source = f"(?i){self.pattern}" if self.ignore_case else self.pattern
        try:
            compiled = re2.compile(source)
        except re2.error as e:
            msg = f"invalid regex pattern {self.pattern!r}: {e}"
            raise MatcherError(msg) from e
        object.__setattr__(self, "_compiled", compiled)

    def _test(self, text: str) -> bool:
        return self._compiled.search(text) is not None

    def _describe_operation(self, description: Description) -> None:
        description.append_text("a string matching ").append_description_of(self.pattern)
