"""Exception hierarchy for revfix."""


class RevfixError(Exception):
    """Base exception for revfix errors."""


class ValidationError(RevfixError):
    """Raised when a fix has an invalid shape or range."""


class RangeValidationError(ValidationError):
    """Raised when a fix's line range falls outside the document.

    Attributes:
        bound: Which check failed: "start", "end" or "order".
        value: The offending line number.
        valid_range: Inclusive (low, high) range that would have been accepted.
    """

    def __init__(self, message: str, bound: str, value: int, valid_range: tuple[int, int]):
        super().__init__(message)
        self.bound = bound
        self.value = value
        self.valid_range = valid_range


class DocumentError(RevfixError):
    """Raised when a document cannot be read."""


class DocumentWriteError(DocumentError):
    """Raised when a document cannot be written."""


class ReviewFileError(RevfixError):
    """Raised when a review file cannot be loaded or parsed."""


class ConfigError(RevfixError):
    """Raised when the configuration file is invalid."""
