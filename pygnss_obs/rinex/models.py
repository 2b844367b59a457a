"""
Data model for parsed RINEX observation files.

An ``ObservationEpoch`` holds one timestamped record with the first two
declared observation values per GPS satellite. A
``ParsedObservationFile`` holds the version flag, the declared
observation types and the epochs in file order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Optional

from pygnss_obs.utils.format import format_epoch_time


class RinexVersion(str, Enum):
    """RINEX observation record conventions."""

    V2 = "2"
    V3 = "3"  # also used for RINEX 4, which keeps the RINEX 3 layout

    @classmethod
    def from_flag(cls, is_v3: bool) -> "RinexVersion":
        return cls.V3 if is_v3 else cls.V2


class ObsTypeLineKind(str, Enum):
    """Header record used to declare observation types."""

    V2 = "# / TYPES OF OBSERV"
    V3 = "SYS / # / OBS TYPES"


@dataclass
class ObservationEpoch:
    """A single observation epoch.

    Attributes:
        year: 4-digit year
        month: Month (1-12)
        day: Day of month
        hour: Hour
        minute: Minute
        second: Seconds with sub-second resolution
        event_flag: Epoch flag (0 = OK, 1 = power failure, >1 = event)
        num_satellites: Number of satellites reported in the epoch header
        measurements: Satellite ID (e.g. 'G01') -> (first, second) value
    """

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: float
    event_flag: int = 0
    num_satellites: int = 0
    measurements: dict[str, tuple[float, float]] = field(default_factory=dict)

    @property
    def datetime(self) -> datetime:
        """Epoch time as a datetime (microsecond resolution)."""
        base = datetime(self.year, self.month, self.day, self.hour, self.minute)
        return base + timedelta(seconds=self.second)

    @property
    def timestamp(self) -> str:
        """Epoch time formatted with RINEX resolution."""
        return format_epoch_time(
            self.year, self.month, self.day, self.hour, self.minute, self.second
        )

    def add_measurement(self, sat_id: str, first: float, second: float) -> None:
        """Store the pair for a satellite; a repeated ID replaces the old pair."""
        self.measurements[sat_id] = (first, second)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "time": self.timestamp,
            "event_flag": self.event_flag,
            "num_satellites": self.num_satellites,
            "measurements": {
                sat: list(values) for sat, values in sorted(self.measurements.items())
            },
        }


@dataclass
class ParsedObservationFile:
    """Result of parsing a RINEX observation file.

    Attributes:
        is_v3: True for RINEX 3 or later, False for RINEX 2
        obs_types: Observation codes in header order, e.g. ['L1C', 'L2W']
        epochs: Complete epochs in file order
        source: Path of the parsed file, if any
    """

    is_v3: bool = False
    obs_types: list[str] = field(default_factory=list)
    epochs: list[ObservationEpoch] = field(default_factory=list)
    source: Optional[str] = field(default=None, compare=False)

    @property
    def version(self) -> RinexVersion:
        return RinexVersion.from_flag(self.is_v3)

    def satellites(self) -> list[str]:
        """Sorted satellite IDs observed in any epoch."""
        sats: set[str] = set()
        for epoch in self.epochs:
            sats.update(epoch.measurements)
        return sorted(sats)

    def summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "=" * 60,
            f"RINEX Observations: {self.source or '<memory>'}",
            "=" * 60,
            f"  RINEX Version:     {self.version.value}",
            f"  Obs Types:         {' '.join(self.obs_types)}",
            f"  Epochs:            {len(self.epochs)}",
            f"  Satellites:        {len(self.satellites())}",
        ]
        if self.epochs:
            lines.append(f"  First Epoch:       {self.epochs[0].timestamp}")
            lines.append(f"  Last Epoch:        {self.epochs[-1].timestamp}")
        lines.append("=" * 60)
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "source": self.source,
            "rinex_version": self.version.value,
            "obs_types": list(self.obs_types),
            "epochs": [epoch.to_dict() for epoch in self.epochs],
        }
