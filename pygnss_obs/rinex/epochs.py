"""
RINEX observation data section parsing.

The data section is walked as a state machine whose transitions depend
on the record layout of the file version:

- RINEX 3/4: an epoch header starts with '>' and each satellite record
  line starts with its own 3-character satellite ID.
- RINEX 2: the epoch header has no marker; it lists the satellite IDs
  (continued on following lines if needed) and the observation records
  follow in the same order without IDs.

The layout is selected once per file through an ``EpochStrategy``.
Blank lines are skipped, except inside an epoch whose RINEX 2 records
are wrapped over several lines: there a blank line is a record line
with all values missing.
Only the first two declared observation values of each GPS satellite
are retained.
"""

from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pygnss_obs.core.config import ParserConfig
from pygnss_obs.rinex.header import LineCursor
from pygnss_obs.rinex.models import ObservationEpoch
from pygnss_obs.rinex.tokens import parse_float_field
from pygnss_obs.utils.format import year_2c_to_4c
from pygnss_obs.utils.logging import get_logger
from pygnss_obs.utils.satellites import (
    is_gps_sat,
    normalize_sat_id,
    split_satellite_list,
)

logger = get_logger(__name__)

V3_EPOCH_MARKER = ">"

# Observations per physical line in a RINEX 2 record
RINEX2_OBS_PER_LINE = 5

# Satellite list field ends at column 68; the receiver clock offset follows
RINEX2_SAT_LIST_END = 68

# yy mm dd hh mi ss.sssssss flag nsat [satellite list]
_RINEX2_EPOCH_RE = re.compile(
    r"^\s*(?P<year>\d{1,4})\s+(?P<month>\d{1,2})\s+(?P<day>\d{1,2})"
    r"\s+(?P<hour>\d{1,2})\s+(?P<minute>\d{1,2})"
    r"\s+(?P<second>\d+(?:\.\d*)?)\s+(?P<flag>\d)\s*(?P<nsat>\d{1,3})"
    r"(?P<rest>.*)$"
)


class EpochState(str, Enum):
    """States of the data section parser."""

    AWAITING_EPOCH_HEADER = "awaiting_epoch_header"
    COLLECTING_SATELLITE_IDS = "collecting_satellite_ids"
    COLLECTING_OBSERVATIONS = "collecting_observations"


@dataclass
class EpochHeader:
    """Fields of one epoch header record."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: float
    event_flag: int
    num_satellites: int
    sat_ids: list[str] = field(default_factory=list)

    def new_epoch(self) -> ObservationEpoch:
        return ObservationEpoch(
            year=self.year,
            month=self.month,
            day=self.day,
            hour=self.hour,
            minute=self.minute,
            second=self.second,
            event_flag=self.event_flag,
            num_satellites=self.num_satellites,
        )


class EpochStrategy(ABC):
    """Record layout of one RINEX version."""

    def __init__(self, obs_types: list[str], config: ParserConfig | None = None):
        self.obs_types = list(obs_types)
        self.config = config or ParserConfig()

    @property
    def num_obs_types(self) -> int:
        return len(self.obs_types)

    @property
    def record_lines(self) -> int:
        """Physical lines per satellite record."""
        return 1

    @abstractmethod
    def parse_epoch_header(self, line: str) -> Optional[EpochHeader]:
        """Parse an epoch header candidate, None if the line is not one."""

    @abstractmethod
    def parse_satellite_record(
        self, lines: list[str], epoch: ObservationEpoch, header: EpochHeader, index: int
    ) -> None:
        """Store the measurements of the index-th record of an epoch."""

    def needs_satellite_ids(self, header: EpochHeader) -> bool:
        """Whether more satellite ID lines follow the epoch header."""
        return False

    def add_satellite_ids(self, line: str, header: EpochHeader) -> None:
        """Append satellite IDs from a continuation line."""

    def starts_epoch(self, line: str) -> bool:
        """Whether a line unambiguously opens a new epoch."""
        return False

    def read_values(self, tokens: list[str]) -> tuple[float, float]:
        """Read the declared observations positionally, keep the first two.

        Missing or malformed values default to 0.0.
        """
        values = [
            parse_float_field(tokens[i] if i < len(tokens) else None)
            for i in range(self.num_obs_types)
        ]
        first = values[0] if values else 0.0
        second = values[1] if len(values) > 1 else 0.0
        return first, second

    @staticmethod
    def store(epoch: ObservationEpoch, sat_id: str, values: tuple[float, float]) -> None:
        if is_gps_sat(sat_id):
            epoch.add_measurement(sat_id, *values)


class RinexV3Strategy(EpochStrategy):
    """RINEX 3/4 layout: '>' epoch headers, one line per satellite."""

    def starts_epoch(self, line: str) -> bool:
        return line.lstrip().startswith(V3_EPOCH_MARKER)

    def parse_epoch_header(self, line: str) -> Optional[EpochHeader]:
        if not self.starts_epoch(line):
            return None

        # > 2024 01 15 00 00  0.0000000  0 30
        parts = line.lstrip()[1:].split()
        if len(parts) < 8:
            return None
        try:
            return EpochHeader(
                year=int(parts[0]),
                month=int(parts[1]),
                day=int(parts[2]),
                hour=int(parts[3]),
                minute=int(parts[4]),
                second=float(parts[5]),
                event_flag=int(parts[6]),
                num_satellites=int(parts[7]),
            )
        except ValueError:
            return None

    def parse_satellite_record(
        self, lines: list[str], epoch: ObservationEpoch, header: EpochHeader, index: int
    ) -> None:
        tokens = lines[0].split()
        if not tokens:
            return
        sat_id = normalize_sat_id(tokens[0])
        self.store(epoch, sat_id, self.read_values(tokens[1:]))


class RinexV2Strategy(EpochStrategy):
    """RINEX 2 layout: satellite list in the epoch header, records by position."""

    @property
    def record_lines(self) -> int:
        if self.config.rinex2_wrap_observations and self.num_obs_types > 0:
            return math.ceil(self.num_obs_types / RINEX2_OBS_PER_LINE)
        return 1

    def parse_epoch_header(self, line: str) -> Optional[EpochHeader]:
        # " 24  1 15  0  0  0.0000000  0 12G07G08G10..."
        m = _RINEX2_EPOCH_RE.match(line)
        if not m:
            return None
        try:
            header = EpochHeader(
                year=year_2c_to_4c(int(m.group("year")), self.config.year_pivot),
                month=int(m.group("month")),
                day=int(m.group("day")),
                hour=int(m.group("hour")),
                minute=int(m.group("minute")),
                second=float(m.group("second")),
                event_flag=int(m.group("flag")),
                num_satellites=int(m.group("nsat")),
            )
        except ValueError:
            return None
        sat_list = line[m.start("rest"):RINEX2_SAT_LIST_END]
        header.sat_ids = split_satellite_list(sat_list)[: header.num_satellites]
        return header

    def needs_satellite_ids(self, header: EpochHeader) -> bool:
        return len(header.sat_ids) < header.num_satellites

    def add_satellite_ids(self, line: str, header: EpochHeader) -> None:
        header.sat_ids.extend(split_satellite_list(line[:RINEX2_SAT_LIST_END]))
        del header.sat_ids[header.num_satellites:]

    def parse_satellite_record(
        self, lines: list[str], epoch: ObservationEpoch, header: EpochHeader, index: int
    ) -> None:
        # every wrapped line but the last holds five values
        tokens: list[str] = []
        for line in lines[:-1]:
            line_tokens = line.split()[:RINEX2_OBS_PER_LINE]
            tokens.extend(line_tokens)
            tokens.extend([""] * (RINEX2_OBS_PER_LINE - len(line_tokens)))
        tokens.extend(lines[-1].split())
        sat_id = normalize_sat_id(header.sat_ids[index])
        self.store(epoch, sat_id, self.read_values(tokens))


def select_strategy(
    is_v3: bool, obs_types: list[str], config: ParserConfig | None = None
) -> EpochStrategy:
    """Pick the record layout for a validated header."""
    if is_v3:
        return RinexV3Strategy(obs_types, config)
    return RinexV2Strategy(obs_types, config)


class EpochParser:
    """State machine over the data section of an observation file."""

    def __init__(self, strategy: EpochStrategy):
        self.strategy = strategy
        self.state = EpochState.AWAITING_EPOCH_HEADER
        self.epochs: list[ObservationEpoch] = []
        self._header: Optional[EpochHeader] = None
        self._epoch: Optional[ObservationEpoch] = None
        self._remaining = 0
        self._pending: list[str] = []

    def parse(self, cursor: LineCursor) -> list[ObservationEpoch]:
        """Consume the data section to end of input.

        Args:
            cursor: Line source positioned after ``END OF HEADER``

        Returns:
            Complete epochs in file order
        """
        for line in cursor:
            if not line.strip():
                # a wrapped record line with all values missing is blank
                if (
                    self.state is EpochState.COLLECTING_OBSERVATIONS
                    and self.strategy.record_lines > 1
                ):
                    self._on_record_line(line)
                continue

            if self.state is EpochState.AWAITING_EPOCH_HEADER:
                self._on_epoch_header(line, cursor.line_number)
            elif self.state is EpochState.COLLECTING_SATELLITE_IDS:
                self.strategy.add_satellite_ids(line, self._header)
                if not self.strategy.needs_satellite_ids(self._header):
                    self._start_observations()
            elif self.strategy.starts_epoch(line):
                logger.warning(
                    "Discarding incomplete epoch",
                    epoch=self._epoch.timestamp,
                    missing=self._remaining,
                    line_number=cursor.line_number,
                )
                self._reset()
                cursor.push_back(line)
            else:
                self._on_record_line(line)

        if self.state is not EpochState.AWAITING_EPOCH_HEADER:
            logger.warning(
                "Discarding incomplete epoch at end of file",
                epoch=self._epoch.timestamp,
            )
            self._reset()

        return self.epochs

    def _on_epoch_header(self, line: str, line_number: int) -> None:
        header = self.strategy.parse_epoch_header(line)
        if header is None:
            logger.debug("Skipping line outside epoch", line_number=line_number)
            return

        self._header = header
        self._epoch = header.new_epoch()
        if self.strategy.needs_satellite_ids(header):
            self.state = EpochState.COLLECTING_SATELLITE_IDS
        else:
            self._start_observations()

    def _start_observations(self) -> None:
        self._remaining = self._header.num_satellites
        self._pending = []
        self.state = EpochState.COLLECTING_OBSERVATIONS
        if self._remaining <= 0:
            self._finish_epoch()

    def _on_record_line(self, line: str) -> None:
        self._pending.append(line)
        if len(self._pending) < self.strategy.record_lines:
            return

        index = self._header.num_satellites - self._remaining
        self.strategy.parse_satellite_record(
            self._pending, self._epoch, self._header, index
        )
        self._pending = []
        self._remaining -= 1
        if self._remaining == 0:
            self._finish_epoch()

    def _finish_epoch(self) -> None:
        self.epochs.append(self._epoch)
        self._reset()

    def _reset(self) -> None:
        self.state = EpochState.AWAITING_EPOCH_HEADER
        self._header = None
        self._epoch = None
        self._remaining = 0
        self._pending = []
