from __future__ import annotations


class DetectorError(Exception):
    """Base class for errors raised inside the analysis core."""


class ConfigError(DetectorError):
    """Raised when a configuration file is invalid or missing required fields."""


class InputValidationError(DetectorError):
    """Raised at the boundary when submitted text cannot be analyzed."""


class AIUnavailableError(DetectorError):
    """The AI provider could not be reached or returned no usable text.

    This is the only failure the retry wrapper retries.
    """


class AIResponseError(DetectorError, ValueError):
    """The AI provider answered, but not with a valid analysis object."""
