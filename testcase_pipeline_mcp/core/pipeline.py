"""Pipeline - Analyze source and synthesize its test cases in one call."""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import DEFAULT_FRAMEWORK, DEFAULT_LANGUAGE, MAX_CODE_SIZE, NEGATIVE_CASE_SEED
from .analyzer import AnalysisResult, analyze_code
from .generators import TemplateCatalog, TestCaseDescriptor, TestCaseSynthesizer
from .generators.heuristics import ValueHeuristics


@dataclass(frozen=True)
class AnalysisOptions:
    """Per-request options."""
    max_size: int = MAX_CODE_SIZE
    framework: str = DEFAULT_FRAMEWORK
    seed: int | None = NEGATIVE_CASE_SEED


@dataclass(frozen=True)
class PipelineResult:
    """Analysis plus the test cases synthesized from it."""
    analysis: AnalysisResult
    test_cases: tuple[TestCaseDescriptor, ...]

    def to_dict(self) -> dict:
        return {
            "analysis": self.analysis.to_dict(),
            "test_cases": [t.to_dict() for t in self.test_cases]
        }


def analyze_and_synthesize(
    source_code: str,
    language: str = DEFAULT_LANGUAGE,
    options: AnalysisOptions | None = None,
    catalog: TemplateCatalog | None = None,
    heuristics: ValueHeuristics | None = None
) -> PipelineResult:
    """
    Analyze source code and synthesize test cases for it.

    Raises the analyzer's ParseError subclasses; synthesis itself never fails.
    """
    options = options or AnalysisOptions()

    analysis = analyze_code(source_code, size_limit=options.max_size, language=language)

    synthesizer = TestCaseSynthesizer(
        heuristics=heuristics,
        catalog=catalog,
        language=language,
        framework=options.framework,
        seed=options.seed
    )
    test_cases = synthesizer.synthesize(analysis)

    return PipelineResult(analysis=analysis, test_cases=tuple(test_cases))
