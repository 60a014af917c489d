"""Test utilities for graphmatch.

Provides a DiagnosticsSink that keeps what it receives, for asserting on
side-channel mismatch output in tests. Not meant for production wiring; use
LoggingSink or your own DiagnosticsSink there.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class RecordingSink:
    """Record every emitted mismatch text, in order.

    >>> from graphmatch import DiagnosingObjectMatcher
    >>> sink = RecordingSink()
    >>> matcher = DiagnosingObjectMatcher("an Account", sink).has("owner", "bob")
    >>> matcher.matches({"owner": "fred"})
    False
    >>> sink.texts
    ["owner was 'fred' (expected 'bob')"]
    """

    texts: list[str] = field(default_factory=list)

    def emit(self, text: str, /) -> None:
        self.texts.append(text)

    @property
    def last(self) -> str | None:
        return self.texts[-1] if self.texts else None

    def clear(self) -> None:
        self.texts.clear()
