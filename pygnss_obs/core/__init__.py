"""Core configuration and exceptions."""

from pygnss_obs.core.config import Settings, ParserConfig, LoggingConfig, load_settings
from pygnss_obs.core.exceptions import (
    ParseErrorKind,
    PyGNSSObsError,
    ConfigurationError,
    ObsFileNotFoundError,
    ObsFileDecodeError,
    MissingHeaderError,
    InvalidObsTypeCountError,
    IncompatibleObsTypesError,
    NoEpochsError,
)

__all__ = [
    "Settings",
    "ParserConfig",
    "LoggingConfig",
    "load_settings",
    "ParseErrorKind",
    "PyGNSSObsError",
    "ConfigurationError",
    "ObsFileNotFoundError",
    "ObsFileDecodeError",
    "MissingHeaderError",
    "InvalidObsTypeCountError",
    "IncompatibleObsTypesError",
    "NoEpochsError",
]
