"""Errors raised while turning source text into an analysis."""


class ParseError(Exception):
    """Base class for every failure of a single analysis request."""

    code = "parse_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(ParseError):
    """Source is empty, not text, or written in an unsupported language."""

    code = "invalid_input"


class SizeLimitExceededError(ParseError):
    """Source is larger than the configured limit."""

    code = "size_limit_exceeded"

    def __init__(self, size: int, limit: int):
        super().__init__(f"Code too large: {size:,} characters (max: {limit:,})")
        self.size = size
        self.limit = limit


class SyntaxAnalysisError(ParseError):
    """The parser rejected the source."""

    code = "syntax_error"

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        location = f" at line {line}, column {column}" if line is not None else ""
        super().__init__(f"Syntax error{location}: {message}")
        self.reason = message
        self.line = line
        self.column = column


class UnsupportedConstructError(ParseError):
    """Reserved for grammar constructs the analyzer cannot handle yet."""

    code = "unsupported_construct"
