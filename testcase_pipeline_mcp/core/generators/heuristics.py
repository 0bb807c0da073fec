"""
Heuristics - Guess plausible values from identifier names.

Provides sample inputs, "high quality" inputs and expected-output shapes for
test synthesis. Rules are ordered; the first rule whose pattern occurs in the
lowercased name wins.
"""

from __future__ import annotations

import copy
from typing import Any, Protocol


class ValueHeuristics(Protocol):
    """Strategy used by the synthesizer to invent values."""

    def sample_value(self, name: str) -> Any:
        """Plausible value for a parameter called `name`."""
        ...

    def quality_value(self, name: str) -> Any:
        """Realistic, well-formed value for a parameter called `name`."""
        ...

    def expected_output(self, name: str) -> dict[str, Any]:
        """Shape of the value a function called `name` probably returns."""
        ...


# (patterns, value) - order matters
SAMPLE_RULES: tuple[tuple[tuple[str, ...], Any], ...] = (
    # Numbers
    (("id", "index", "count"), 1),
    (("age", "year"), 25),
    (("price", "amount", "value"), 100.50),
    # Strings
    (("name", "title"), "Test Name"),
    (("email",), "test@example.com"),
    (("url", "link"), "https://example.com"),
    (("password",), "Test123!"),
    # Booleans
    (("is", "has", "can"), True),
    # Collections
    (("list", "array", "items"), ["item1", "item2"]),
    # Objects
    (("user", "person"), {"id": 1, "name": "Test User"}),
    (("config", "options"), {"option1": True, "option2": "value"}),
)
DEFAULT_SAMPLE = "testValue"

QUALITY_RULES: tuple[tuple[tuple[str, ...], Any], ...] = (
    (("email",), "user@domain.com"),
    (("phone",), "+1234567890"),
    (("date",), "2024-01-01T00:00:00.000Z"),
    (("url",), "https://validurl.com/path"),
    (("name",), "Valid Name"),
)
DEFAULT_QUALITY = "validValue"

# (patterns, output type, example value) - order matters
OUTPUT_RULES: tuple[tuple[tuple[str, ...], str, Any], ...] = (
    (("get", "find"), "object_or_null", {"id": 1, "data": "example"}),
    (("is", "has", "can"), "boolean", True),
    (("count", "length"), "number", 0),
    (("list", "all"), "array", []),
    (("create", "save"), "object", {"id": 1, "created": True}),
)


def match_rule(name: str, rules):
    """Return the first rule whose patterns occur in the lowercased name."""
    clean = name.lower()
    for rule in rules:
        if any(pattern in clean for pattern in rule[0]):
            return rule
    return None


class NameHeuristics:
    """Default name-based heuristics (stateless; values are fresh copies)."""

    def sample_value(self, name: str) -> Any:
        rule = match_rule(name, SAMPLE_RULES)
        if rule is None:
            return DEFAULT_SAMPLE
        return copy.deepcopy(rule[1])

    def quality_value(self, name: str) -> Any:
        rule = match_rule(name, QUALITY_RULES)
        if rule is None:
            return DEFAULT_QUALITY
        return copy.deepcopy(rule[1])

    def expected_output(self, name: str) -> dict[str, Any]:
        output: dict[str, Any] = {
            "type": "unknown",
            "description": f"Expected output of {name}"
        }

        rule = match_rule(name, OUTPUT_RULES)
        if rule is not None:
            output["type"] = rule[1]
            output["value"] = copy.deepcopy(rule[2])

        return output


DEFAULT_HEURISTICS = NameHeuristics()


def sample_value(name: str) -> Any:
    """Sample value for a parameter name using the default heuristics."""
    return DEFAULT_HEURISTICS.sample_value(name)


def quality_value(name: str) -> Any:
    """High quality value for a parameter name using the default heuristics."""
    return DEFAULT_HEURISTICS.quality_value(name)
