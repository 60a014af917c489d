"""graphmatch — path-aware hamcrest matchers for object graphs.

All public types are exported from this module for flat imports:

    from graphmatch import CompositePropertyMatcher, PropertyMatcher, an_object
"""

__version__ = "0.1.0"

# Matcher tree
from graphmatch._accumulator import MatchAccumulator
from graphmatch._composite import MISSING, CompositePropertyMatcher

# Config types — see graphmatch._config for details
from graphmatch._config import (
    BuiltInMatch,
    ConfigParseError,
    CustomMatch,
    EqualsMatch,
    LikeMatch,
    ObjectMatcherConfig,
    PropertyConfig,
    TypedConfig,
    ValueMatchConfig,
    parse_matcher_config,
    parse_matcher_yaml,
)
from graphmatch._diagnostics import (
    DiagnosingCompositeMatcher,
    DiagnosingObjectMatcher,
    LoggingSink,
)
from graphmatch._object import ObjectMatcher, an_object
from graphmatch._property import (
    MatcherError,
    PathNotWiredError,
    PropertyMatcher,
    join_path,
)
from graphmatch._reflecting import (
    ReflectingPropertyMatcher,
    StructurallyEqualMatcher,
    describe_value,
    structurally_equal,
    structurally_equal_to,
)

# Registry — see graphmatch._registry for details
from graphmatch._registry import (
    MAX_DEPTH,
    MAX_PATTERN_LENGTH,
    MAX_PROPERTIES,
    MAX_REGEX_PATTERN_LENGTH,
    InvalidConfigError,
    PatternTooLongError,
    Registry,
    RegistryBuilder,
    TooManyPropertiesError,
    UnknownTypeUrlError,
)

# Leaf matchers
from graphmatch._string_matchers import (
    ContainsMatcher,
    ExactMatcher,
    PrefixMatcher,
    RegexMatcher,
    SuffixMatcher,
)

# Protocols
from graphmatch._types import DiagnosticsSink, PathAware, PathProvider

__all__ = [
    # Protocols
    "PathProvider",
    "PathAware",
    "DiagnosticsSink",
    # Matcher tree
    "PropertyMatcher",
    "MatchAccumulator",
    "CompositePropertyMatcher",
    "ObjectMatcher",
    "an_object",
    "MISSING",
    "join_path",
    "MatcherError",
    "PathNotWiredError",
    # Structural equality
    "ReflectingPropertyMatcher",
    "StructurallyEqualMatcher",
    "structurally_equal",
    "structurally_equal_to",
    "describe_value",
    # Diagnostics
    "DiagnosingCompositeMatcher",
    "DiagnosingObjectMatcher",
    "LoggingSink",
    # Leaf matchers
    "ExactMatcher",
    "PrefixMatcher",
    "SuffixMatcher",
    "ContainsMatcher",
    "RegexMatcher",
    # Config types
    "TypedConfig",
    "BuiltInMatch",
    "EqualsMatch",
    "LikeMatch",
    "CustomMatch",
    "ValueMatchConfig",
    "PropertyConfig",
    "ObjectMatcherConfig",
    "ConfigParseError",
    "parse_matcher_config",
    "parse_matcher_yaml",
    # Registry
    "RegistryBuilder",
    "Registry",
    "UnknownTypeUrlError",
    "InvalidConfigError",
    "TooManyPropertiesError",
    "PatternTooLongError",
    "MAX_DEPTH",
    "MAX_PROPERTIES",
    "MAX_PATTERN_LENGTH",
    "MAX_REGEX_PATTERN_LENGTH",
]
