"""Services package.

Exposes stateless service classes and shared result types used by the MCP handlers.
"""

from .analysis import AnalysisService
from .base import (
    ErrorCode,
    ServiceError,
    ServiceResult,
)
from .code_loader import (
    CodeLoader,
    LoadedCode,
)
from .generation import GenerationMetadata, GenerationResult, GenerationService, default_catalog

__all__ = [
    # Base
    "ServiceResult",
    "ServiceError",
    "ErrorCode",
    # Code loading
    "CodeLoader",
    "LoadedCode",
    # Services
    "AnalysisService",
    "GenerationService",
    "GenerationResult",
    "GenerationMetadata",
    "default_catalog",
]
