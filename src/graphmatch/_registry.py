"""Type registry for config-driven matcher construction.

Architecture:
- RegistryBuilder → .build() → Registry (immutable)
- Factories are plain callables: (config: dict) → hamcrest Matcher
- load_matcher() walks the config tree and builds an ObjectMatcher tree

Example::

    builder = RegistryBuilder()
    builder.matcher("example.v1.Positive", lambda cfg: greater_than(0))
    registry = builder.build()

    config = parse_matcher_config(yaml.safe_load(text))
    matcher = registry.load_matcher(config)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from hamcrest import equal_to

from graphmatch._config import (
    BuiltInMatch,
    CustomMatch,
    EqualsMatch,
    LikeMatch,
    ObjectMatcherConfig,
)
from graphmatch._diagnostics import DiagnosingObjectMatcher
from graphmatch._object import ObjectMatcher
from graphmatch._property import MatcherError
from graphmatch._reflecting import structurally_equal_to
from graphmatch._string_matchers import (
    ContainsMatcher,
    ExactMatcher,
    PrefixMatcher,
    RegexMatcher,
    SuffixMatcher,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from hamcrest.core.matcher import Matcher

    from graphmatch._config import ValueMatchConfig
    from graphmatch._types import DiagnosticsSink

# ═══════════════════════════════════════════════════════════════════════════════
# Limits
# ═══════════════════════════════════════════════════════════════════════════════

MAX_DEPTH = 32
MAX_PROPERTIES = 256
MAX_PATTERN_LENGTH = 8192
MAX_REGEX_PATTERN_LENGTH = 4096

# ═══════════════════════════════════════════════════════════════════════════════
# Error types
# ═══════════════════════════════════════════════════════════════════════════════


class UnknownTypeUrlError(MatcherError):
    """A type_url was not found in the registry."""

    def __init__(self, type_url: str, available: list[str]) -> None:
        self.type_url = type_url
        self.available = sorted(available)
        if self.available:
            registered = ", ".join(self.available)
            msg = f"unknown matcher type_url: {type_url!r} (registered: {registered})"
        else:
            msg = f"unknown matcher type_url: {type_url!r} (no matcher types are registered)"
        super().__init__(msg)


class InvalidConfigError(MatcherError):
    """A config payload was malformed or semantically invalid."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"invalid config: {source}")


class TooManyPropertiesError(MatcherError):
    """An object config names too many properties."""

    def __init__(self, count: int, max_: int) -> None:
        self.count = count
        self.max = max_
        super().__init__(f"too many properties: {count} exceeds maximum {max_}")


class PatternTooLongError(MatcherError):
    """A match pattern exceeds the length limit."""

    def __init__(self, length: int, max_: int) -> None:
        self.length = length
        self.max = max_
        super().__init__(f"pattern length {length} exceeds maximum {max_}")


# ═══════════════════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════════════════

type MatcherFactory = Callable[[dict[str, Any]], Matcher[Any]]


class RegistryBuilder:
    """Builder for constructing a Registry.

    Register matcher factories with type URLs, then call build() to produce
    an immutable Registry.
    """

    def __init__(self) -> None:
        self._matcher_factories: dict[str, MatcherFactory] = {}

    def matcher(self, type_url: str, factory: MatcherFactory) -> RegistryBuilder:
        """Register a matcher factory with a type URL."""
        self._matcher_factories[type_url] = factory
        return self

    def build(self) -> Registry:
        """Freeze the registry. No further registration is possible."""
        return Registry(
            _matcher_factories=MappingProxyType(dict(self._matcher_factories)),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Registry
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Registry:
    """Immutable registry of matcher factories.

    Constructed via RegistryBuilder. Use load_matcher() to build a runtime
    ObjectMatcher tree from configuration.
    """

    _matcher_factories: MappingProxyType[str, MatcherFactory] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def load_matcher(
        self, config: ObjectMatcherConfig, sink: DiagnosticsSink | None = None
    ) -> ObjectMatcher[Any]:
        """Load an ObjectMatcher from configuration.

        With a sink, the root is a DiagnosingObjectMatcher that emits its
        mismatch text on failure. Nested objects never emit.

        Raises:
            UnknownTypeUrlError: custom matcher type_url not registered
            InvalidConfigError: config payload malformed
            TooManyPropertiesError: too many properties on one object
            PatternTooLongError: pattern exceeds length limit
            MatcherError: depth exceeded
        """
        root: ObjectMatcher[Any]
        if sink is not None:
            root = DiagnosingObjectMatcher(config.label, sink)
        else:
            root = ObjectMatcher(config.label)
        return self._populate(root, config, depth=1)

    @property
    def matcher_count(self) -> int:
        """Number of registered matcher types."""
        return len(self._matcher_factories)

    def contains_matcher(self, type_url: str) -> bool:
        """Check if a matcher type URL is registered."""
        return type_url in self._matcher_factories

    def matcher_type_urls(self) -> list[str]:
        """Return all registered matcher type URLs (sorted)."""
        return sorted(self._matcher_factories.keys())

    # ── Private loading methods ────────────────────────────────────────────

    def _populate(
        self, target: ObjectMatcher[Any], config: ObjectMatcherConfig, depth: int
    ) -> ObjectMatcher[Any]:
        if depth > MAX_DEPTH:
            msg = f"matcher depth {depth} exceeds maximum allowed depth {MAX_DEPTH}"
            raise MatcherError(msg)
        if len(config.properties) > MAX_PROPERTIES:
            raise TooManyPropertiesError(len(config.properties), MAX_PROPERTIES)

        for prop in config.properties:
            target.has(prop.name, self._load_value_match(prop.match, depth))
        return target

    def _load_value_match(self, config: ValueMatchConfig, depth: int) -> Matcher[Any]:
        match config:
            case ObjectMatcherConfig(label=label):
                return self._populate(ObjectMatcher(label), config, depth + 1)
            case BuiltInMatch(variant=variant, value=value, ignore_case=ignore_case):
                return _compile_built_in(variant, value, ignore_case)
            case EqualsMatch(value=value):
                return equal_to(value)
            case LikeMatch(value=value):
                return structurally_equal_to(value)
            case CustomMatch(typed_config=tc):
                factory = self._matcher_factories.get(tc.type_url)
                if factory is None:
                    raise UnknownTypeUrlError(tc.type_url, list(self._matcher_factories.keys()))
                try:
                    return factory(tc.config)
                except Exception as e:
                    raise InvalidConfigError(str(e)) from e
            case _:  # pragma: no cover
                msg = f"unknown value match config type: {type(config).__name__}"
                raise InvalidConfigError(msg)


# ═══════════════════════════════════════════════════════════════════════════════
# Built-in matcher compilation
# ═══════════════════════════════════════════════════════════════════════════════


def _check_pattern_length(variant: str, value: str) -> None:
    """Enforce pattern length limits on built-in string match specs."""
    if variant == "Regex":
        if len(value) > MAX_REGEX_PATTERN_LENGTH:
            raise PatternTooLongError(len(value), MAX_REGEX_PATTERN_LENGTH)
    elif len(value) > MAX_PATTERN_LENGTH:
        raise PatternTooLongError(len(value), MAX_PATTERN_LENGTH)


def _compile_built_in(variant: str, value: str, ignore_case: bool) -> Matcher[Any]:
    """Compile a built-in string match variant into a leaf matcher."""
    _check_pattern_length(variant, value)

    match variant:
        case "Exact":
            return ExactMatcher(value, ignore_case=ignore_case)
        case "Prefix":
            return PrefixMatcher(value, ignore_case=ignore_case)
        case "Suffix":
            return SuffixMatcher(value, ignore_case=ignore_case)
        case "Contains":
            return ContainsMatcher(value, ignore_case=ignore_case)
        case "Regex":
            try:
                return RegexMatcher(value, ignore_case=ignore_case)
            except MatcherError as e:
                raise InvalidConfigError(str(e)) from e
        case _:
            msg = f"unknown built-in match variant: {variant!r}"
            raise InvalidConfigError(msg)
