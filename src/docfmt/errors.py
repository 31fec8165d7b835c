"""Error kinds raised by document conversions."""


class FormatterError(Exception):
    """Base class for all conversion failures."""
    pass


class MalformedDocument(FormatterError, ValueError):
    """Raised when input contains a cycle or an unsupported value kind."""
    pass


class EncodingError(FormatterError, ValueError):
    """Raised when a scalar cannot be represented in the target text encoding."""
    pass


class RecursionLimitExceeded(FormatterError):
    """Raised when document nesting exceeds the configured depth bound."""

    def __init__(self, max_depth: int, path: str = ""):
        self.max_depth = max_depth
        self.path = path
        location = f" at '{path}'" if path else ""
        super().__init__(f"Nesting exceeds maximum depth of {max_depth}{location}")
