"""
Templates - Turn a test case into literal test source.

Templates are plain text with {{name}} placeholders. They are looked up by
(language, framework, template name) from an injected TemplateSource and fall
back to the built-in Jest templates, then to a one-line comment stub.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Protocol

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".tmpl"

DEFAULT_TEMPLATES: dict[str, str] = {
    "unit": """describe("{{functionName}}", () => {
  test("{{testDescription}}", () => {
    // Arrange
    const input = {{inputData}};
    const expected = {{expectedOutput}};

    // Act
    const result = {{functionName}}({{inputParams}});

    // Assert
    expect(result).{{assertion}}(expected);
  });
});""",
    "async": """describe("{{functionName}}", () => {
  test("{{testDescription}}", async () => {
    const input = {{inputData}};
    const expected = {{expectedOutput}};

    const result = await {{functionName}}({{inputParams}});

    expect(result).{{assertion}}(expected);
  });
});""",
    "edge_case": """describe("{{functionName}} - Edge Cases", () => {
  test("should handle {{edgeCase}}", () => {
    expect(() => {{functionName}}({{inputData}})).{{expectation}};
  });
});""",
}

STUB_TEMPLATE = "// Test code for {{ownerName}} - {{scenario}}"


def render(template: str, bindings: Mapping[str, object]) -> str:
    """Replace every {{name}} with its binding; unknown placeholders stay as they are."""
    rendered = template
    for name, value in bindings.items():
        rendered = rendered.replace("{{" + name + "}}", str(value))
    return rendered


class TemplateSource(Protocol):
    """Read-only provider of configured templates."""

    def get_templates(self, language: str, framework: str) -> Mapping[str, str]:
        """Return template text keyed by template name."""
        ...


class StaticTemplateSource:
    """Templates held in memory, keyed by (language, framework)."""

    def __init__(self, templates: Mapping[tuple[str, str], Mapping[str, str]] | None = None):
        self._templates = {key: dict(value) for key, value in (templates or {}).items()}

    def get_templates(self, language: str, framework: str) -> Mapping[str, str]:
        return dict(self._templates.get((language, framework), {}))


class DirectoryTemplateSource:
    """Templates stored as <root>/<language>/<framework>/<name>.tmpl files."""

    def __init__(self, root: str | Path):
        self._root = Path(root)

    def get_templates(self, language: str, framework: str) -> Mapping[str, str]:
        folder = self._root / language / framework
        if not folder.is_dir():
            return {}

        return {
            path.stem: path.read_text(encoding="utf-8")
            for path in sorted(folder.glob(f"*{TEMPLATE_SUFFIX}"))
        }


class TemplateCatalog:
    """
    Resolves templates and renders them.

    Lookups from the source are cached per (language, framework); call
    refresh() to drop the cache. A failing source is treated as having no
    configured templates.
    """

    def __init__(self, source: TemplateSource | None = None):
        self._source = source
        self._cache: dict[tuple[str, str], dict[str, str]] = {}

    def templates_for(self, language: str, framework: str) -> dict[str, str]:
        key = (language, framework)
        if key not in self._cache:
            self._cache[key] = self._load(language, framework)
        return self._cache[key]

    def resolve(self, language: str, framework: str, name: str) -> str:
        """Configured template → built-in default → comment stub."""
        configured = self.templates_for(language, framework)
        if name in configured:
            return configured[name]
        return DEFAULT_TEMPLATES.get(name, STUB_TEMPLATE)

    def render(
        self,
        language: str,
        framework: str,
        name: str,
        bindings: Mapping[str, object]
    ) -> str:
        return render(self.resolve(language, framework, name), bindings)

    def refresh(self) -> None:
        self._cache.clear()

    def _load(self, language: str, framework: str) -> dict[str, str]:
        if self._source is None:
            return {}
        try:
            return dict(self._source.get_templates(language, framework))
        except Exception as e:
            logger.warning(f"Could not load templates for {language}/{framework}, using defaults: {e}")
            return {}
