"""
PyGNSS-Obs: RINEX observation file parsing

Reads GPS observations from RINEX 2, 3 and 4 observation files into a
version independent per-epoch table keyed by satellite.
"""

__version__ = "1.0.0"
__author__ = "PyGNSS-Obs Team"

from pygnss_obs.core.config import Settings
from pygnss_obs.core.exceptions import ParseErrorKind
from pygnss_obs.rinex.models import ObservationEpoch, ParsedObservationFile
from pygnss_obs.rinex.reader import ParseResult, RinexObsReader, parse, read_rinex_obs

__all__ = [
    "ObservationEpoch",
    "ParsedObservationFile",
    "ParseErrorKind",
    "ParseResult",
    "RinexObsReader",
    "Settings",
    "parse",
    "read_rinex_obs",
    "__version__",
]
