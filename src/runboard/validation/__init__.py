"""Upload validation module."""

from runboard.validation.core import (
    FailureKind,
    UploadValidator,
    ValidatedUpload,
    ValidationResult,
    validate_upload,
)
from runboard.validation.reporter import ConsoleReporter

__all__ = [
    "ConsoleReporter",
    "FailureKind",
    "UploadValidator",
    "ValidatedUpload",
    "ValidationResult",
    "validate_upload",
]
