"""Exceptions and warnings raised by the classification engine."""

from typing import Optional


class LandCoverError(Exception):
    """Base class for all land cover classification errors."""


class UntrainedModelError(LandCoverError, RuntimeError):
    """Prediction (or saving) was requested before a successful training."""


class EmptyTrainingSetError(LandCoverError, ValueError):
    """Training was requested with zero samples."""


class FormatError(LandCoverError, ValueError):
    """A training set file is structurally malformed."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class UnknownLabelWarning(UserWarning):
    """A sample label did not match any land cover type and was replaced."""
