"""
Output writers for parsed observations.

CSV layout, one row per epoch and GPS satellite:

    time,event_flag,satellite,<obs1>,<obs2>

where <obs1> and <obs2> are the first two declared observation codes.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import TextIO

from pygnss_obs.rinex.models import ParsedObservationFile


def csv_columns(obs: ParsedObservationFile) -> list[str]:
    """Column names of the CSV export."""
    names = list(obs.obs_types[:2])
    while len(names) < 2:
        names.append(f"obs{len(names) + 1}")
    return ["time", "event_flag", "satellite", *names]


def write_csv_stream(obs: ParsedObservationFile, stream: TextIO) -> int:
    """Write observations as CSV to an open text stream.

    Returns:
        Number of data rows written
    """
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(csv_columns(obs))
    rows = 0
    for epoch in obs.epochs:
        for sat, (first, second) in sorted(epoch.measurements.items()):
            writer.writerow([epoch.timestamp, epoch.event_flag, sat, f"{first:.3f}", f"{second:.3f}"])
            rows += 1
    return rows


def write_csv(obs: ParsedObservationFile, path: Path | str) -> int:
    """Write observations to a CSV file.

    Args:
        obs: Parsed observation file
        path: Output CSV path

    Returns:
        Number of data rows written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="") as f:
        return write_csv_stream(obs, f)


def to_json(obs: ParsedObservationFile, indent: int | None = 2) -> str:
    """Serialize observations to a JSON string."""
    return json.dumps(obs.to_dict(), indent=indent)
