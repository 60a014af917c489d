"""Config types for data-driven matcher trees.

Config-driven construction path:
  dict → parse_matcher_config() → ObjectMatcherConfig → Registry.load_matcher() → ObjectMatcher

Config shape (YAML shown)::

    label: a Transfer
    properties:
      amount: {Equals: 100}
      reference: {Prefix: "TX-"}
      to_account:
        label: an Account
        properties:
          owner: {Exact: tracy}
          balance: {Equals: 150}

Relationship to runtime types:

| Config type            | Runtime type                    |
|------------------------|---------------------------------|
| ObjectMatcherConfig    | ObjectMatcher                   |
| PropertyConfig         | PropertyMatcher                 |
| BuiltInMatch           | ExactMatcher, PrefixMatcher ... |
| EqualsMatch            | hamcrest equal_to               |
| LikeMatch              | StructurallyEqualMatcher        |
| CustomMatch            | registered matcher factory      |
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml

# ═══════════════════════════════════════════════════════════════════════════════
# Config types
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class TypedConfig:
    """Reference to a registered matcher type with its configuration."""

    type_url: str
    config: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class BuiltInMatch:
    """Built-in string matching (Exact, Prefix, Suffix, Contains, Regex).

    { "Exact": "hello" }, { "Prefix": "/api" }, { "Regex": "^foo" }
    """

    variant: str
    value: str
    ignore_case: bool = False


@dataclass(frozen=True, slots=True)
class EqualsMatch:
    """Equality with a literal value: { "Equals": 100 }."""

    value: Any


@dataclass(frozen=True, slots=True)
class LikeMatch:
    """Structural equality with a literal value: { "Like": [1, 2] }."""

    value: Any


@dataclass(frozen=True, slots=True)
class CustomMatch:
    """Custom matcher resolved via the registry's matcher factories."""

    typed_config: TypedConfig


@dataclass(frozen=True, slots=True)
class PropertyConfig:
    """One named property and what it must match."""

    name: str
    match: ValueMatchConfig


@dataclass(frozen=True, slots=True)
class ObjectMatcherConfig:
    """Configuration for an ObjectMatcher.

    Properties keep their config order, which is also the order of the
    expectation and mismatch descriptions.
    """

    label: str
    properties: tuple[PropertyConfig, ...]


type ValueMatchConfig = BuiltInMatch | EqualsMatch | LikeMatch | CustomMatch | ObjectMatcherConfig

# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → config types)
# ═══════════════════════════════════════════════════════════════════════════════

_STRING_MATCH_VARIANTS = frozenset({"Exact", "Prefix", "Suffix", "Contains", "Regex"})
_VALUE_MATCH_KEYS = _STRING_MATCH_VARIANTS | {"Equals", "Like", "Custom"}

DEFAULT_LABEL = "an object"


class ConfigParseError(Exception):
    """Error parsing a config dict into config types."""


def parse_matcher_config(data: dict[str, Any]) -> ObjectMatcherConfig:
    """Parse a dict into an ObjectMatcherConfig.

    This is the main entry point for config loading.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    label = data.get("label", DEFAULT_LABEL)
    if not isinstance(label, str):
        msg = f"'label' must be a string, got {type(label).__name__}"
        raise ConfigParseError(msg)

    raw_properties = data.get("properties")
    if raw_properties is None:
        msg = "missing required field 'properties'"
        raise ConfigParseError(msg)
    if not isinstance(raw_properties, dict):
        msg = f"'properties' must be a dict, got {type(raw_properties).__name__}"
        raise ConfigParseError(msg)

    properties = tuple(
        _parse_property(name, spec) for name, spec in raw_properties.items()
    )
    return ObjectMatcherConfig(label=label, properties=properties)


def parse_matcher_yaml(text: str) -> ObjectMatcherConfig:
    """Parse a single YAML document into an ObjectMatcherConfig.

    Raises:
        ConfigParseError: If the text is not valid YAML or the document is malformed.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        msg = f"invalid YAML: {e}"
        raise ConfigParseError(msg) from e
    return parse_matcher_config(data)


def _parse_property(name: Any, data: Any) -> PropertyConfig:
    if not isinstance(name, str) or not name:
        msg = f"property name must be a non-empty string, got {name!r}"
        raise ConfigParseError(msg)
    return PropertyConfig(name=name, match=_parse_value_match(name, data))


def _parse_value_match(name: str, data: Any) -> ValueMatchConfig:
    """Parse a value match dict.

    A dict with 'properties' is a nested object; otherwise exactly one
    value match key must be present.
    """
    if not isinstance(data, dict):
        msg = f"property {name!r}: value match must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    if "properties" in data:
        return parse_matcher_config(data)

    keys = sorted(k for k in data if k in _VALUE_MATCH_KEYS)
    if len(keys) != 1:
        expected = sorted(_VALUE_MATCH_KEYS)
        msg = (
            f"property {name!r}: exactly one of {expected} is required, "
            f"got keys: {sorted(data.keys())}"
        )
        raise ConfigParseError(msg)

    variant = keys[0]
    value = data[variant]
    if variant == "Equals":
        return EqualsMatch(value=value)
    if variant == "Like":
        return LikeMatch(value=value)
    if variant == "Custom":
        return CustomMatch(typed_config=_parse_typed_config(value))

    if not isinstance(value, str):
        msg = f"property {name!r}: {variant} value must be a string, got {type(value).__name__}"
        raise ConfigParseError(msg)
    ignore_case = data.get("ignore_case", False)
    if not isinstance(ignore_case, bool):
        msg = f"property {name!r}: 'ignore_case' must be a bool"
        raise ConfigParseError(msg)
    return BuiltInMatch(variant=variant, value=value, ignore_case=ignore_case)


def _parse_typed_config(data: Any) -> TypedConfig:
    """Parse a typed config dict."""
    if not isinstance(data, dict):
        msg = f"typed_config must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    if "type_url" not in data:
        msg = "typed_config missing required field 'type_url'"
        raise ConfigParseError(msg)

    type_url = data["type_url"]
    if not isinstance(type_url, str):
        msg = f"type_url must be a string, got {type(type_url).__name__}"
        raise ConfigParseError(msg)

    config = data.get("config", {})
    if not isinstance(config, dict):
        msg = f"config must be a dict, got {type(config).__name__}"
        raise ConfigParseError(msg)

    return TypedConfig(type_url=type_url, config=config)
