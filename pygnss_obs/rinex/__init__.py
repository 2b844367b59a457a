"""RINEX observation file parsing."""

from pygnss_obs.rinex.models import (
    ObservationEpoch,
    ParsedObservationFile,
    RinexVersion,
    ObsTypeLineKind,
)
from pygnss_obs.rinex.header import (
    HeaderParser,
    LineCursor,
    ObsHeader,
    is_rinex_v3,
    validate_header,
)
from pygnss_obs.rinex.epochs import (
    EpochParser,
    EpochState,
    EpochStrategy,
    RinexV2Strategy,
    RinexV3Strategy,
    select_strategy,
)
from pygnss_obs.rinex.reader import (
    ParseResult,
    RinexObsReader,
    parse,
    read_rinex_obs,
)
from pygnss_obs.rinex.tokens import extract_obs_types_from_line, is_number, trim

__all__ = [
    # Data model
    "ObservationEpoch",
    "ParsedObservationFile",
    "RinexVersion",
    "ObsTypeLineKind",
    # Header
    "HeaderParser",
    "LineCursor",
    "ObsHeader",
    "is_rinex_v3",
    "validate_header",
    # Data section
    "EpochParser",
    "EpochState",
    "EpochStrategy",
    "RinexV2Strategy",
    "RinexV3Strategy",
    "select_strategy",
    # Reader
    "ParseResult",
    "RinexObsReader",
    "parse",
    "read_rinex_obs",
    # Tokens
    "extract_obs_types_from_line",
    "is_number",
    "trim",
]
