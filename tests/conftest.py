"""Shared RINEX samples for the test suite."""

from pathlib import Path

import pytest


def hdr(data: str, label: str) -> str:
    """Format a header record: data in columns 1-60, label after."""
    return f"{data:<60}{label}"


V3_LINES = [
    hdr("     3.04           OBSERVATION DATA    M (MIXED)", "RINEX VERSION / TYPE"),
    hdr("ALGO", "MARKER NAME"),
    hdr("G    4 C1C L1C L2W C2W", "SYS / # / OBS TYPES"),
    hdr("R    2 C1C L1C", "SYS / # / OBS TYPES"),
    hdr("    30.000", "INTERVAL"),
    hdr("", "END OF HEADER"),
    "> 2024 01 15 00 00  0.0000000  0  2",
    "G03  21000000.123  110355000.456  86000000.789  21000001.000",
    "G07  22000000.000  115000000.000",
    "> 2024 01 15 00 00 30.0000000  0  3",
    "G03  21000100.000  110355100.000  86000100.000  21000101.000",
    "R05  19000000.000  101000000.000",
    "G07  22000100.000  115000100.000  89000100.000  22000101.000",
]

V2_LINES = [
    hdr("     2.11           OBSERVATION DATA    G (GPS)", "RINEX VERSION / TYPE"),
    hdr("ALGO", "MARKER NAME"),
    hdr("     4    L1    L2    C1    P2", "# / TYPES OF OBSERV"),
    hdr("    30.000", "INTERVAL"),
    hdr("", "END OF HEADER"),
    " 24  1 15  0  0  0.0000000  0  3G03G07 12",
    "  110355000.456   86000000.789  21000000.123  21000001.456",
    "  115000000.000   89000000.000  22000000.000  22000001.000",
    "  120000000.000   93000000.000  23000000.000  23000001.000",
    " 24  1 15  0  0 30.0000000  0  2G03G07",
    "  110355100.000   86000100.000  21000100.000  21000101.000",
    "  115000100.000   89000100.000  22000100.000  22000101.000",
]


@pytest.fixture
def v3_lines() -> list[str]:
    """RINEX 3 file with two epochs and a GLONASS record."""
    return list(V3_LINES)


@pytest.fixture
def v2_lines() -> list[str]:
    """RINEX 2 file with two epochs."""
    return list(V2_LINES)


@pytest.fixture
def write_rinex(tmp_path: Path):
    """Write lines to a RINEX file under tmp_path and return its path."""

    def _write(lines: list[str], name: str = "algo0150.24o") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write
