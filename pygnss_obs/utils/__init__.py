"""Utility modules for logging, formatting and satellite identifiers."""

from pygnss_obs.utils.logging import get_logger, setup_logging, setup_logging_from_config
from pygnss_obs.utils.format import year_2c_to_4c, format_epoch_time
from pygnss_obs.utils.satellites import (
    GNSSConstellation,
    is_gps_sat,
    normalize_sat_id,
    split_satellite_list,
)

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    "setup_logging_from_config",
    # Formatting
    "year_2c_to_4c",
    "format_epoch_time",
    # Satellite identifiers
    "GNSSConstellation",
    "is_gps_sat",
    "normalize_sat_id",
    "split_satellite_list",
]
