"""
Custom exceptions for PyGNSS-Obs.

Provides a hierarchy of exceptions for the failure modes of a RINEX
observation parse. Every parse error carries a ``kind`` so callers can
branch on the category without matching on classes.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence


class ParseErrorKind(str, Enum):
    """Categories of RINEX observation parse failures."""

    FILE_NOT_FOUND = "FileNotFound"
    MISSING_HEADER = "MissingHeader"
    INVALID_OBS_TYPE_COUNT = "InvalidObsTypeCount"
    INCOMPATIBLE_OBS_TYPES = "IncompatibleObsTypes"
    NO_EPOCHS = "NoEpochs"


class PyGNSSObsError(Exception):
    """Base exception for all PyGNSS-Obs errors."""

    kind: ParseErrorKind | None = None


class ConfigurationError(PyGNSSObsError):
    """Configuration-related errors."""

    pass


class ObsFileNotFoundError(PyGNSSObsError):
    """Observation file cannot be opened for reading."""

    kind = ParseErrorKind.FILE_NOT_FOUND

    def __init__(self, path: str, message: str | None = None):
        self.path = path
        super().__init__(message or f"Cannot open {path}")


class ObsFileDecodeError(ObsFileNotFoundError):
    """Observation file cannot be decoded with the configured encoding."""

    def __init__(self, path: str, error: UnicodeDecodeError):
        self.reason = error.reason
        super().__init__(
            path,
            f"Cannot decode {path} at byte {error.start}: {error.reason}",
        )


class MissingHeaderError(PyGNSSObsError):
    """Version line, type declaration or header terminator absent."""

    kind = ParseErrorKind.MISSING_HEADER


class InvalidObsTypeCountError(PyGNSSObsError):
    """Declared observation type count is invalid or not honoured."""

    kind = ParseErrorKind.INVALID_OBS_TYPE_COUNT

    def __init__(
        self,
        declared: int | None,
        collected: int | None = None,
        message: str | None = None,
    ):
        self.declared = declared
        self.collected = collected
        if message is None:
            if collected is None:
                message = f"Invalid observation type count ({declared}) in header"
            else:
                message = (
                    f"Observation type count mismatch: declared {declared}, "
                    f"found {collected}"
                )
        super().__init__(message)


class IncompatibleObsTypesError(PyGNSSObsError):
    """Observation types do not follow the declared RINEX version."""

    kind = ParseErrorKind.INCOMPATIBLE_OBS_TYPES

    def __init__(self, message: str, codes: Sequence[str] = ()):
        self.codes = list(codes)
        super().__init__(message)


class NoEpochsError(PyGNSSObsError):
    """Header is valid but no complete epoch was read."""

    kind = ParseErrorKind.NO_EPOCHS

    def __init__(self, path: str | None = None):
        self.path = path
        where = f" in {path}" if path else ""
        super().__init__(f"No complete observation epochs{where}")
