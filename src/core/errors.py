from __future__ import annotations


class NormaliseError(Exception):
    """Base error for the input normaliser."""

    code = "ERR_NORMALISE"


class ValidationError(NormaliseError):
    """Raised when tool input is invalid."""

    code = "ERR_VALIDATION"


class UnexpectedInputError(NormaliseError):
    """Raised when a value cannot be turned into file records."""

    code = "ERR_UNEXPECTED_INPUT"


class UnexpectedInputAbsent(UnexpectedInputError):
    """Raised when the input is None."""

    def __init__(self) -> None:
        super().__init__("Unexpected input: None")


class UnexpectedInputUnrecognized(UnexpectedInputError):
    """Raised when a value (or a nested element) matches no known shape."""

    def __init__(self, value: object) -> None:
        self.type_name = type(value).__name__
        super().__init__(f"Unexpected input: {self.type_name}")


class NestingTooDeepError(NormaliseError):
    """Raised when nested content sequences exceed the configured depth."""

    code = "ERR_NESTING_TOO_DEEP"

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(f"Content nesting exceeds max depth of {max_depth}")
