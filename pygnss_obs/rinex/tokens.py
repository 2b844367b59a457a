"""
Lexical helpers for fixed-format RINEX lines.

Header records are 80-column lines: data in columns 1-60, label in
columns 61-80. Observation type codes are recovered by splitting the
data part on whitespace and filtering the words by length and leading
character.
"""

from __future__ import annotations

# First characters of observation codes (code, phase, doppler, SNR,
# RINEX 2 P-code, RINEX 2 T-transit)
OBS_CODE_START = "CLDSPT"


def trim(s: str) -> str:
    """Remove leading and trailing blanks, tabs and line breaks."""
    return s.strip(" \t\r\n")


def extract_obs_types_from_line(
    line: str,
    skip_chars: int,
    min_len: int,
    max_len: int,
    valid_start: str = OBS_CODE_START,
) -> list[str]:
    """Extract candidate observation type codes from a header line.

    Works for both RINEX 2 (``# / TYPES OF OBSERV``) and RINEX 3
    (``SYS / # / OBS TYPES``) records.

    Args:
        line: Header line (data part)
        skip_chars: Number of leading characters to skip
        min_len: Minimum accepted code length
        max_len: Maximum accepted code length
        valid_start: Characters a code may start with

    Returns:
        Accepted codes in line order
    """
    words = line[skip_chars:].split()
    return [
        w for w in words
        if min_len <= len(w) <= max_len and w[0] in valid_start
    ]


def is_number(s: str) -> bool:
    """Check whether a token looks like a floating point literal.

    This is a permissive lexical check: blanks are ignored, one sign
    and one decimal point are allowed, exponent markers are accepted
    anywhere. '1.2.3' is rejected but '1E' is accepted.
    """
    dot = sign = digit = False
    for c in s:
        if c in " \t":
            continue
        if c in "+-":
            if sign or dot or digit:
                return False
            sign = True
            continue
        if c == ".":
            if dot:
                return False
            dot = True
            continue
        if not c.isdigit() and c not in "Ee":
            return False
        if c.isdigit():
            digit = True
    return digit


def parse_float_field(token: str | None) -> float:
    """Convert a data token to float, 0.0 when missing or malformed."""
    if not token or not is_number(token):
        return 0.0
    try:
        return float(token.replace(" ", "").replace("\t", ""))
    except ValueError:
        return 0.0
