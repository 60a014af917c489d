"""Composite matchers that also report mismatches through a side channel.

Some callers compare with a plain boolean and throw the description away,
e.g. argument matching inside a mock. A diagnosing composite forwards its
mismatch text to an injected DiagnosticsSink before returning False.
Sink failures are logged and otherwise ignored; they never change the
verdict.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from hamcrest.core.string_description import StringDescription

from graphmatch._composite import CompositePropertyMatcher
from graphmatch._object import ObjectMatcher

if TYPE_CHECKING:
    from graphmatch._types import DiagnosticsSink

logger = logging.getLogger(__name__)


class LoggingSink:
    """DiagnosticsSink that writes mismatch text to a logger."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.WARNING) -> None:
        self.logger = logger if logger is not None else logging.getLogger("graphmatch.mismatch")
        self.level = level

    def emit(self, text: str, /) -> None:
        self.logger.log(self.level, "match failed: %s", text)


class DiagnosingCompositeMatcher[T](CompositePropertyMatcher[T]):
    """CompositePropertyMatcher that emits its mismatch text on failure.

    At most one emit() per failed ``matches`` call.
    """

    def __init__(
        self,
        label: str,
        sink: DiagnosticsSink,
        expected_type: type | tuple[type, ...] | None = None,
    ) -> None:
        super().__init__(label, expected_type)
        self._sink = sink

    @property
    def sink(self) -> DiagnosticsSink:
        return self._sink

    def _matches(self, item: Any) -> bool:
        matched = super()._matches(item)
        if not matched:
            self._emit_mismatch(item)
        return matched

    def _emit_mismatch(self, item: Any) -> None:
        description = StringDescription()
        self.describe_mismatch(item, description)
        try:
            self._sink.emit(str(description))
        except Exception:
            logger.debug("diagnostics sink %r failed", self._sink, exc_info=True)


class DiagnosingObjectMatcher[T](DiagnosingCompositeMatcher[T], ObjectMatcher[T]):
    """ObjectMatcher that emits its mismatch text on failure."""
