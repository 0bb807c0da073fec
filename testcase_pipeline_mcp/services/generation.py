"""
Generation Service - Business logic for test generation.

Orchestrates the full pipeline:
1. Load code
2. Analyze code
3. Synthesize test cases and render them into a Jest suite
4. Optionally save the suite to a file
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..constants import DEFAULT_FRAMEWORK, DEFAULT_LANGUAGE, NEGATIVE_CASE_SEED, TEMPLATES_DIR
from ..core.analyzer import AnalysisResult
from ..core.generators import (
    DirectoryTemplateSource,
    GeneratedSuite,
    TemplateCatalog,
    TestCaseDescriptor,
    build_suite,
    synthesize,
)
from ..core.generators.heuristics import ValueHeuristics
from .analysis import AnalysisService
from .base import ErrorCode, ServiceResult
from .code_loader import CodeLoader


@dataclass(frozen=True)
class GenerationMetadata:
    """
    Additional metadata about the generation.

    Attributes:
        framework: Test framework the suite targets
        function_count: Number of functions in source
        class_count: Number of classes in source
        test_count: Number of synthesized test cases
        saved_to: File path if saved, None otherwise
    """
    framework: str
    function_count: int
    class_count: int
    test_count: int
    saved_to: str | None = None


@dataclass(frozen=True)
class GenerationResult:
    """
    Complete result of test generation.

    Attributes:
        analysis: Structural analysis the cases were synthesized from
        test_cases: Synthesized test cases, in inventory order
        suite: The cases grouped into a test file
        metadata: Additional information about the generation
    """
    analysis: AnalysisResult
    test_cases: tuple[TestCaseDescriptor, ...]
    suite: GeneratedSuite
    metadata: GenerationMetadata

    def counts_by(self, attribute: str) -> dict[str, int]:
        """Number of test cases per value of a descriptor attribute, in first-seen order."""
        counts: dict[str, int] = {}
        for test in self.test_cases:
            key = getattr(test, attribute)
            counts[key] = counts.get(key, 0) + 1
        return counts


def default_catalog() -> TemplateCatalog:
    """Catalog backed by TESTCASE_TEMPLATES_DIR when set, built-ins otherwise."""
    if TEMPLATES_DIR:
        return TemplateCatalog(DirectoryTemplateSource(TEMPLATES_DIR))
    return TemplateCatalog()


class GenerationService:
    """
    Service for generating test cases.

    Orchestrates:
    1. Code loading and analysis
    2. Heuristic synthesis and template rendering
    3. Optional file output

    This class is stateless apart from the template cache - inject
    dependencies via __init__.
    """

    def __init__(
        self,
        code_loader: CodeLoader | None = None,
        analysis_service: AnalysisService | None = None,
        catalog: TemplateCatalog | None = None,
        heuristics: ValueHeuristics | None = None,
        seed: int | None = NEGATIVE_CASE_SEED
    ):
        self._loader = code_loader or CodeLoader()
        # Share the loader with analysis service for consistency
        self._analyzer = analysis_service or AnalysisService(self._loader)
        self._catalog = catalog or default_catalog()
        self._heuristics = heuristics
        self._seed = seed

    def generate(
        self,
        code: str | None = None,
        file_path: str | None = None,
        language: str = DEFAULT_LANGUAGE,
        framework: str = DEFAULT_FRAMEWORK,
        max_size: int | None = None,
        output_path: str | None = None
    ) -> ServiceResult[GenerationResult]:
        """
        Generate test cases for JavaScript code.

        Example:
            service = GenerationService()
            result = service.generate(code="function add(a, b) { return a + b; }")
            if result.success:
                print(result.data.suite.to_code())
        """
        # Step 1: Load and analyze code
        analyze_result = self._analyzer.analyze_with_metadata(
            code=code,
            file_path=file_path,
            language=language,
            max_size=max_size
        )

        if not analyze_result.success:
            return ServiceResult.fail(
                analyze_result.error.code,
                f"Cannot generate tests: {analyze_result.error.message}",
                analyze_result.error.details
            )

        analysis, loaded = analyze_result.data

        # Step 2: Synthesize and group
        test_cases = synthesize(
            analysis,
            heuristics=self._heuristics,
            catalog=self._catalog,
            framework=framework,
            seed=self._seed
        )
        suite = build_suite(analysis, test_cases, module_name=loaded.module_name, framework=framework)

        # Step 3: Optionally save to file
        saved_to = None
        if output_path:
            save_result = self._save_to_file(suite.to_code(), output_path)
            if save_result.success:
                saved_to = output_path
            else:
                # Add warning but don't fail the whole operation
                suite.warnings.append(
                    f"Could not save to file: {save_result.error.message}"
                )

        # Step 4: Build result
        metadata = GenerationMetadata(
            framework=framework,
            function_count=len(analysis.functions),
            class_count=len(analysis.classes),
            test_count=len(test_cases),
            saved_to=saved_to
        )

        return ServiceResult.ok(GenerationResult(
            analysis=analysis,
            test_cases=tuple(test_cases),
            suite=suite,
            metadata=metadata
        ))

    def _save_to_file(self, content: str, path: str) -> ServiceResult[str]:
        try:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
            Path(path).write_text(content, encoding="utf-8")
            return ServiceResult.ok(path)
        except PermissionError:
            return ServiceResult.fail(
                ErrorCode.PERMISSION_DENIED,
                f"Permission denied: {path}"
            )
        except OSError as e:
            return ServiceResult.fail(
                ErrorCode.INTERNAL_ERROR,
                f"Failed to save file: {e}"
            )
