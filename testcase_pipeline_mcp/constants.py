"""
Shared constants used across the project.
"""

import os
from typing import Final

# Languages the analyzer has a grammar for
SUPPORTED_LANGUAGES: Final[frozenset[str]] = frozenset({"javascript"})
DEFAULT_LANGUAGE: Final[str] = "javascript"

# Test frameworks the built-in templates target
DEFAULT_FRAMEWORK: Final[str] = "jest"

# File constraints
MAX_CODE_SIZE: Final[int] = int(os.getenv("MAX_CODE_SIZE", "1048576"))  # 1 MiB
ALLOWED_EXTENSIONS: Final[frozenset[str]] = frozenset({'.js', '.jsx', '.mjs', '.cjs'})

# Template configuration (directory laid out as <language>/<framework>/<name>.tmpl)
TEMPLATES_DIR: Final[str | None] = os.getenv("TESTCASE_TEMPLATES_DIR")

# Seed for the null/undefined parameter case (see TestCaseSynthesizer)
NEGATIVE_CASE_SEED: Final[int] = int(os.getenv("TESTCASE_NEGATIVE_SEED", "0"))

# Complexity thresholds used for priorities
HIGH_COMPLEXITY: Final[int] = 10
MEDIUM_COMPLEXITY: Final[int] = 5

# Serialized syntax trees stop descending below this depth
MAX_AST_DEPTH: Final[int] = int(os.getenv("TESTCASE_MAX_AST_DEPTH", "200"))
