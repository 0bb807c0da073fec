"""
Tests for the generator building blocks.

Covers:
- Name heuristics (sample values, quality values, output shapes)
- JavaScript literal rendering
- Template rendering and lookup
"""

import copy
import math
import re
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

from testcase_pipeline_mcp.core.generators import (
    DEFAULT_TEMPLATES,
    NAN,
    UNDEFINED,
    DirectoryTemplateSource,
    NameHeuristics,
    StaticTemplateSource,
    TemplateCatalog,
    js_literal,
    quality_value,
    render,
    sample_value,
    to_jsonable,
)
from testcase_pipeline_mcp.core.generators.templates import STUB_TEMPLATE


# =============================================================================
# Heuristics Tests
# =============================================================================

class TestSampleValue:
    """Tests for sample_value."""

    @pytest.mark.parametrize("name,expected", [
        ("id", 1),
        ("userId", 1),
        ("index", 1),
        ("age", 25),
        ("birthYear", 25),
        ("price", 100.50),
        ("title", "Test Name"),
        ("email", "test@example.com"),
        ("websiteUrl", "https://example.com"),
        ("password", "Test123!"),
        ("isActive", True),
        ("hasAccess", True),
        ("array", ["item1", "item2"]),
        ("person", {"id": 1, "name": "Test User"}),
        ("config", {"option1": True, "option2": "value"}),
        ("foo", "testValue"),
    ])
    def test_name_rules(self, name, expected):
        assert sample_value(name) == expected

    def test_first_match_wins(self):
        """Rules are checked in order: 'name' beats 'user', 'is' beats 'list'."""
        assert sample_value("userName") == "Test Name"
        assert sample_value("list") is True
        assert sample_value("amountCount") == 1

    def test_case_insensitive(self):
        assert sample_value("EMAIL") == "test@example.com"

    def test_values_are_fresh_copies(self):
        first = sample_value("items")
        first.append("mutated")

        assert sample_value("items") == ["item1", "item2"]

    def test_deterministic(self):
        assert sample_value("options") == sample_value("options")


class TestQualityValue:
    """Tests for quality_value."""

    @pytest.mark.parametrize("name,expected", [
        ("email", "user@domain.com"),
        ("phoneNumber", "+1234567890"),
        ("startDate", "2024-01-01T00:00:00.000Z"),
        ("url", "https://validurl.com/path"),
        ("fullName", "Valid Name"),
        ("anything", "validValue"),
    ])
    def test_name_rules(self, name, expected):
        assert quality_value(name) == expected


class TestExpectedOutput:
    """Tests for NameHeuristics.expected_output."""

    def setup_method(self):
        self.heuristics = NameHeuristics()

    @pytest.mark.parametrize("name,kind,value", [
        ("getUser", "object_or_null", {"id": 1, "data": "example"}),
        ("findById", "object_or_null", {"id": 1, "data": "example"}),
        ("isValid", "boolean", True),
        ("canEdit", "boolean", True),
        ("countItems", "number", 0),
        ("allUsers", "array", []),
        ("createOrder", "object", {"id": 1, "created": True}),
    ])
    def test_name_rules(self, name, kind, value):
        output = self.heuristics.expected_output(name)

        assert output["type"] == kind
        assert output["value"] == value
        assert output["description"] == f"Expected output of {name}"

    def test_unknown_shape(self):
        output = self.heuristics.expected_output("add")

        assert output["type"] == "unknown"
        assert "value" not in output


# =============================================================================
# JavaScript Literal Tests
# =============================================================================

class TestJsLiteral:
    """Tests for js_literal and to_jsonable."""

    @pytest.mark.parametrize("value,expected", [
        (None, "null"),
        (UNDEFINED, "undefined"),
        (True, "true"),
        (False, "false"),
        (0, "0"),
        (-1, "-1"),
        (100.5, "100.5"),
        (NAN, "NaN"),
        ("", '""'),
        ('say "hi"', '"say \\"hi\\""'),
        ([], "[]"),
        ({}, "{}"),
        ([1, "a"], '[1, "a"]'),
        ({"id": 1, "first-name": "x"}, '{ id: 1, "first-name": "x" }'),
    ])
    def test_literals(self, value, expected):
        assert js_literal(value) == expected

    def test_undefined_is_singleton(self):
        assert copy.deepcopy({"a": UNDEFINED})["a"] is UNDEFINED
        assert not UNDEFINED

    def test_to_jsonable(self):
        data = to_jsonable({"a": UNDEFINED, "b": NAN, "c": [None, 1], "d": "x"})

        assert data == {"a": "undefined", "b": "NaN", "c": [None, 1], "d": "x"}

    def test_nan_is_shared(self):
        assert math.isnan(NAN)
        assert [NAN] == [NAN]


# =============================================================================
# Template Tests
# =============================================================================

class TestRender:
    """Tests for placeholder substitution."""

    def test_substitutes_every_occurrence(self):
        assert render("{{a}} and {{a}} and {{b}}", {"a": 1, "b": "x"}) == "1 and 1 and x"

    def test_unknown_placeholders_stay(self):
        assert render("{{a}} {{zzz}}", {"a": "ok"}) == "ok {{zzz}}"

    def test_round_trip_leaves_no_placeholders(self):
        """Binding every placeholder of a built-in template leaves none behind."""
        for template in DEFAULT_TEMPLATES.values():
            names = set(re.findall(r"\{\{(\w+)\}\}", template))
            rendered = render(template, {name: f"<{name}>" for name in names})

            assert "{{" not in rendered
            for name in names:
                assert f"<{name}>" in rendered


class TestTemplateCatalog:
    """Tests for template lookup and fallbacks."""

    def test_builtin_defaults(self):
        catalog = TemplateCatalog()

        assert catalog.resolve("javascript", "jest", "unit") == DEFAULT_TEMPLATES["unit"]
        assert catalog.resolve("javascript", "jest", "edge_case") == DEFAULT_TEMPLATES["edge_case"]

    def test_stub_for_unknown_template(self):
        catalog = TemplateCatalog()

        assert catalog.resolve("javascript", "jest", "loop") == STUB_TEMPLATE
        assert catalog.render("javascript", "jest", "loop", {
            "ownerName": "loop_0", "scenario": "zero"
        }) == "// Test code for loop_0 - zero"

    def test_configured_template_wins(self):
        source = StaticTemplateSource({("javascript", "jest"): {"unit": "custom {{functionName}}"}})
        catalog = TemplateCatalog(source)

        assert catalog.render("javascript", "jest", "unit", {"functionName": "add"}) == "custom add"
        # Other names still fall back
        assert catalog.resolve("javascript", "jest", "async") == DEFAULT_TEMPLATES["async"]

    def test_lookup_is_per_language_and_framework(self):
        source = StaticTemplateSource({("javascript", "mocha"): {"unit": "mocha"}})
        catalog = TemplateCatalog(source)

        assert catalog.resolve("javascript", "mocha", "unit") == "mocha"
        assert catalog.resolve("javascript", "jest", "unit") == DEFAULT_TEMPLATES["unit"]

    def test_source_is_cached_until_refresh(self):
        source = Mock()
        source.get_templates.return_value = {"unit": "v1"}
        catalog = TemplateCatalog(source)

        catalog.resolve("javascript", "jest", "unit")
        catalog.resolve("javascript", "jest", "async")
        assert source.get_templates.call_count == 1

        source.get_templates.return_value = {"unit": "v2"}
        catalog.refresh()
        assert catalog.resolve("javascript", "jest", "unit") == "v2"

    def test_failing_source_falls_back(self):
        source = Mock()
        source.get_templates.side_effect = ConnectionError("template store offline")
        catalog = TemplateCatalog(source)

        assert catalog.resolve("javascript", "jest", "unit") == DEFAULT_TEMPLATES["unit"]


class TestDirectoryTemplateSource:
    """Tests for templates stored on disk."""

    def test_reads_tmpl_files(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            folder = Path(tmpdir) / "javascript" / "jest"
            folder.mkdir(parents=True)
            (folder / "unit.tmpl").write_text("it('{{testDescription}}')", encoding="utf-8")
            (folder / "notes.txt").write_text("ignored", encoding="utf-8")

            templates = DirectoryTemplateSource(tmpdir).get_templates("javascript", "jest")

        assert templates == {"unit": "it('{{testDescription}}')"}

    def test_missing_folder(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            assert DirectoryTemplateSource(tmpdir).get_templates("javascript", "jest") == {}
