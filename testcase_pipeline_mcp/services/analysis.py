"""
Analysis Service - Business logic for code analysis.

Wraps the analyzer with code loading and turns analyzer exceptions into
ServiceResult failures. Returns the existing AnalysisResult model.
"""

from __future__ import annotations

import logging

from ..constants import DEFAULT_LANGUAGE, MAX_CODE_SIZE
from ..core.analyzer import AnalysisResult, analyze_code
from ..core.errors import ParseError
from .base import ServiceResult
from .code_loader import CodeLoader, LoadedCode

logger = logging.getLogger(__name__)


class AnalysisService:
    """
    Service for analyzing JavaScript code.

    Orchestrates:
    1. Code loading (from file or string)
    2. Analysis via analyzer module
    3. Error handling and result wrapping

    This class is stateless - inject dependencies via __init__.
    """

    def __init__(
        self,
        code_loader: CodeLoader | None = None,
        max_size: int = MAX_CODE_SIZE
    ):
        self._loader = code_loader or CodeLoader()
        self._max_size = max_size

    def analyze(
        self,
        code: str | None = None,
        file_path: str | None = None,
        language: str = DEFAULT_LANGUAGE,
        max_size: int | None = None
    ) -> ServiceResult[AnalysisResult]:
        """
        Analyze JavaScript code.

        Example:
            service = AnalysisService()
            result = service.analyze(code="function add(a, b) { return a + b; }")
            if result.success:
                print(f"Found {len(result.data.functions)} functions")
        """
        result = self.analyze_with_metadata(code, file_path, language, max_size)
        return result.map(lambda pair: pair[0])

    def analyze_with_metadata(
        self,
        code: str | None = None,
        file_path: str | None = None,
        language: str = DEFAULT_LANGUAGE,
        max_size: int | None = None
    ) -> ServiceResult[tuple[AnalysisResult, LoadedCode]]:
        """
        Analyze code and return both analysis and load metadata.

        Useful when the module name or source path is needed later.
        """
        # Step 1: Load code
        load_result = self._loader.load(code=code, file_path=file_path)

        if not load_result.success:
            return ServiceResult.fail(
                load_result.error.code,
                load_result.error.message,
                load_result.error.details
            )

        loaded = load_result.data

        # Step 2: Run analysis
        try:
            analysis = analyze_code(
                loaded.content,
                size_limit=max_size if max_size is not None else self._max_size,
                language=language
            )
        except ParseError as e:
            logger.info(f"Analysis of {loaded.source_path or loaded.module_name} failed: {e.message}")
            return ServiceResult.from_parse_error(e)

        return ServiceResult.ok((analysis, loaded))
