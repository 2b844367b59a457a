"""
Satellite identifier handling.

RINEX 3 identifies satellites with a system letter and a two-digit PRN
(``G07``). RINEX 2 files often drop the letter for GPS (``7`` or ``07``)
and write the satellite list of an epoch as concatenated 3-character
fields (``G05G07G12``). The helpers here classify and normalize both
forms to the RINEX 3 convention.

Usage:
    from pygnss_obs.utils.satellites import normalize_sat_id, is_gps_sat

    normalize_sat_id("3")    # 'G03'
    is_gps_sat("R05")        # False
"""

from __future__ import annotations

import re
from enum import Enum


class GNSSConstellation(str, Enum):
    """GNSS satellite constellations by RINEX system letter."""

    GPS = "G"        # US Global Positioning System
    GLONASS = "R"    # Russian GLONASS
    GALILEO = "E"    # European Galileo
    BEIDOU = "C"     # Chinese BeiDou
    QZSS = "J"       # Japanese QZSS
    SBAS = "S"       # SBAS (WAAS, EGNOS, MSAS, GAGAN)
    IRNSS = "I"      # Indian IRNSS/NavIC
    MIXED = "M"      # Multi-constellation

    @classmethod
    def from_letter(cls, letter: str) -> "GNSSConstellation | None":
        """Get constellation from a system letter, None if unknown."""
        try:
            return cls(letter.upper())
        except ValueError:
            return None


# System letter, optional blank, PRN digits ('G07', 'G 7', ' 7', '12')
_SAT_FIELD_RE = re.compile(r"[A-Za-z]?[ ]?\d{1,2}")


def is_gps_sat(sat_id: str) -> bool:
    """Check whether a satellite identifier denotes GPS.

    Bare numeric PRNs count as GPS since RINEX 2 omits the letter.
    """
    if not sat_id:
        return False
    return sat_id[0] == GNSSConstellation.GPS.value or sat_id[0].isdigit()


def normalize_sat_id(sat_id: str) -> str:
    """Normalize a satellite identifier to the RINEX 3 form.

    Args:
        sat_id: Identifier as found in the file ('3', '03', 'G03')

    Returns:
        'G' + two-digit PRN for bare PRNs; any other identifier is
        returned trimmed but otherwise unchanged ('G3' stays 'G3').
    """
    t = sat_id.strip()
    if not t:
        return t
    if t[0] == "G":
        return t

    if t[0].isdigit():
        match = re.match(r"\d+", t)
        try:
            prn = int(match.group(0))
        except (AttributeError, ValueError):
            return t
        return f"G{prn:02d}"

    return t


def split_satellite_list(text: str) -> list[str]:
    """Split a RINEX 2 satellite list into identifiers.

    Accepts concatenated 3-character fields ('G05G07G12'), whitespace
    separated PRNs ('3 7 12') and blank padded fields ('G 7'). Tokens
    containing a decimal point (the receiver clock offset written after
    the list) are skipped.

    Args:
        text: Satellite list part of an epoch header or continuation line

    Returns:
        Identifiers in file order, blank padding replaced by zeros
    """
    kept = " ".join(tok for tok in text.split() if "." not in tok)
    sats = []
    for field in _SAT_FIELD_RE.findall(kept):
        field = field.strip()
        if len(field) == 3 and field[1] == " ":
            field = f"{field[0]}0{field[2]}"
        sats.append(field)
    return sats
