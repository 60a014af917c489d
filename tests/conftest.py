"""Scenario fixture loader for graphmatch.

Loads YAML documents from tests/fixtures/ for parametrized testing. Each
document is either a scenario (config plus candidate cases) or, in
errors.yaml, a config that must be rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import yaml
from hamcrest import greater_than_or_equal_to

from graphmatch import Registry, RegistryBuilder

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"
ERRORS_FILE = "errors.yaml"


@dataclass
class ScenarioCase:
    """A single candidate evaluated against a fixture's config."""

    fixture_name: str
    case_name: str
    config: dict[str, Any]
    candidate: Any
    expect: bool
    mismatch: str | None

    @property
    def id(self) -> str:
        return f"{self.fixture_name}::{self.case_name}"


def make_registry() -> Registry:
    """Registry with the custom matcher types the fixtures refer to."""
    builder = RegistryBuilder()
    builder.matcher("example.v1.AtLeast", lambda cfg: greater_than_or_equal_to(cfg["min"]))
    return builder.build()


def _load_documents(path: Path) -> list[dict[str, Any]]:
    with path.open() as f:
        return [doc for doc in yaml.safe_load_all(f) if doc is not None]


def load_scenarios() -> list[ScenarioCase]:
    """Load every scenario case from all fixture files except errors.yaml."""
    cases: list[ScenarioCase] = []
    for yaml_file in sorted(FIXTURES_DIR.glob("*.yaml")):
        if yaml_file.name == ERRORS_FILE:
            continue
        for doc in _load_documents(yaml_file):
            for case in doc["cases"]:
                cases.append(
                    ScenarioCase(
                        fixture_name=doc["name"],
                        case_name=case["name"],
                        config=doc["config"],
                        candidate=case["candidate"],
                        expect=case["expect"],
                        mismatch=case.get("mismatch"),
                    )
                )
    return cases


def load_error_configs() -> list[dict[str, Any]]:
    """Load the configs that parsing or loading must reject."""
    return _load_documents(FIXTURES_DIR / ERRORS_FILE)


@pytest.fixture
def registry() -> Registry:
    return make_registry()
