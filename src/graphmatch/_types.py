"""Core protocols for graphmatch.

The matcher tree is wired through three small capabilities:
- PathProvider reports where in the object graph a node sits
- PathAware marks inner matchers that render their own paths
- DiagnosticsSink receives mismatch text through a side channel
"""

from __future__ import annotations

from typing import ClassVar, Protocol, runtime_checkable


@runtime_checkable
class PathProvider(Protocol):
    """Report the dotted path of a node relative to the root object.

    The root of a match has the empty path. A provider that is not yet
    wired into its parent chain raises PathNotWiredError rather than
    returning a partial path.
    """

    def get_path(self) -> str: ...


@runtime_checkable
class PathAware(Protocol):
    """A matcher that can describe a mismatch with its own full path.

    The ``describes_own_path`` tag is declared at class level. When a
    PropertyMatcher is given a matcher carrying the tag, it installs itself
    as that matcher's PathProvider and delegates mismatch rendering to it.
    An optional ``verdict(item)`` method is used instead of ``matches`` while
    an enclosing mismatch is being described.
    """

    describes_own_path: ClassVar[bool]

    def set_path_provider(self, provider: PathProvider | None, /) -> None: ...


@runtime_checkable
class DiagnosticsSink(Protocol):
    """Receive the mismatch text of a failed match. Fire-and-forget."""

    def emit(self, text: str, /) -> None: ...
