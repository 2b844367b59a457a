"""
RINEX observation header parsing and validation.

Scans header records up to ``END OF HEADER`` and recovers the RINEX
version and the ordered list of GPS observation types:

- RINEX 3/4: ``SYS / # / OBS TYPES``, one declaration per system, codes
  from column 8, continuation lines repeat the label.
- RINEX 2: ``# / TYPES OF OBSERV``, codes from column 7, continuation
  lines follow unconditionally, nine codes per line.

The collected header is validated before any data record is read.

Usage:
    from pygnss_obs.rinex.header import HeaderParser, LineCursor

    with open(path) as f:
        header = HeaderParser().parse(LineCursor(f))
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from pygnss_obs.core.exceptions import (
    IncompatibleObsTypesError,
    InvalidObsTypeCountError,
    MissingHeaderError,
)
from pygnss_obs.rinex.models import ObsTypeLineKind
from pygnss_obs.rinex.tokens import extract_obs_types_from_line, trim
from pygnss_obs.utils.logging import get_logger
from pygnss_obs.utils.satellites import GNSSConstellation

logger = get_logger(__name__)

VERSION_LABEL = "RINEX VERSION / TYPE"
END_OF_HEADER = "END OF HEADER"
V3_TYPES_LABEL = ObsTypeLineKind.V3.value
V2_TYPES_LABEL = ObsTypeLineKind.V2.value

GPS_SYSTEM = GNSSConstellation.GPS.value

# Codes per physical line in a RINEX 2 type declaration
RINEX2_CODES_PER_LINE = 9

# Attribute letters that only exist in RINEX 3 three-character codes
RINEX3_ATTRIBUTE_SUFFIXES = frozenset("CWPSX")

# Bare two-character codes that only exist in RINEX 2
RINEX2_BARE_CODES = frozenset({"C1", "L1", "S1", "C2", "L2", "S2"})

_LEADING_FIELD_RE = re.compile(r"\s*(\S+)")


class LineCursor:
    """Line iterator with one-line push-back.

    Strips line terminators and counts lines consumed so far.
    """

    def __init__(self, lines: Iterable[str]):
        self._lines: Iterator[str] = iter(lines)
        self._pushed: list[str] = []
        self.line_number = 0

    def __iter__(self) -> "LineCursor":
        return self

    def __next__(self) -> str:
        if self._pushed:
            line = self._pushed.pop()
        else:
            line = next(self._lines).rstrip("\r\n")
        self.line_number += 1
        return line

    def next_line(self) -> Optional[str]:
        """Next line, or None at end of input."""
        return next(self, None)

    def push_back(self, line: str) -> None:
        """Return a line so the next read yields it again."""
        self._pushed.append(line)
        self.line_number -= 1


@dataclass
class ObsHeader:
    """Observation-related content of a RINEX header.

    Attributes:
        is_v3: Version flag from the ``RINEX VERSION / TYPE`` record
        version_string: Raw version field, e.g. '3.04'
        version_seen: A version record was found
        type_line_kinds: Kinds of type declaration records found, including
            skipped non-GPS ``SYS / # / OBS TYPES`` records
        declared_count: GPS observation type count from the header
        obs_types: Collected GPS observation codes in header order
        skipped_systems: System letters of skipped declaration records
        terminated: ``END OF HEADER`` was reached
    """

    is_v3: bool = False
    version_string: str = ""
    version_seen: bool = False
    type_line_kinds: set[ObsTypeLineKind] = field(default_factory=set)
    declared_count: int = 0
    obs_types: list[str] = field(default_factory=list)
    skipped_systems: list[str] = field(default_factory=list)
    terminated: bool = False

    @property
    def type_line_seen(self) -> bool:
        return bool(self.type_line_kinds)


def is_rinex_v3(line: str) -> bool:
    """Check whether a version record declares RINEX 3 or 4."""
    if len(line) >= 20 and VERSION_LABEL in line:
        v = trim(line[:20])
        return bool(v) and v[0] in "34"
    return False


def header_data(line: str, label: str) -> str:
    """Data part of a header record, i.e. the text before its label."""
    pos = line.find(label)
    return line[:pos] if pos >= 0 else line


def parse_obs_type_count(field_text: str) -> tuple[int, int]:
    """Parse the leading count field of a type declaration.

    Args:
        field_text: Data part of the record, system letter removed

    Returns:
        Tuple of (count, end offset of the count field); count is -1
        when the field is missing or not an integer
    """
    match = _LEADING_FIELD_RE.match(field_text)
    if not match:
        return -1, len(field_text)
    try:
        return int(match.group(1)), match.end()
    except ValueError:
        return -1, match.end()


class HeaderParser:
    """Parser for the observation part of a RINEX header."""

    def parse(self, cursor: LineCursor) -> ObsHeader:
        """Scan and validate a header.

        Args:
            cursor: Line source positioned at the start of the file

        Returns:
            Validated ObsHeader; the cursor is left at the first data line

        Raises:
            MissingHeaderError: Version/type record or terminator missing
            InvalidObsTypeCountError: Bad or unmatched type count
            IncompatibleObsTypesError: Codes from the wrong RINEX version
        """
        header = self.scan(cursor)
        validate_header(header)
        logger.debug(
            "Parsed RINEX header",
            version=header.version_string,
            obs_types=header.obs_types,
        )
        return header

    def scan(self, cursor: LineCursor) -> ObsHeader:
        """Collect header records without cross-checking them."""
        header = ObsHeader()

        for line in cursor:
            if VERSION_LABEL in line:
                header.is_v3 = is_rinex_v3(line)
                header.version_string = trim(line[:20])
                header.version_seen = True

            if V3_TYPES_LABEL in line:
                self._parse_v3_types(line, cursor, header)
            elif V2_TYPES_LABEL in line:
                self._parse_v2_types(line, cursor, header)

            if END_OF_HEADER in line:
                header.terminated = True
                break

        if header.skipped_systems and header.declared_count == 0:
            logger.warning(
                "Only non-GPS observation type declarations found",
                systems=header.skipped_systems,
            )

        return header

    def _parse_v3_types(
        self, line: str, cursor: LineCursor, header: ObsHeader
    ) -> None:
        header.type_line_kinds.add(ObsTypeLineKind.V3)

        data = header_data(line, V3_TYPES_LABEL)
        system = data[:1]
        if system != GPS_SYSTEM:
            # blank system letter: continuation of a skipped declaration
            if system.strip():
                header.skipped_systems.append(system)
                constellation = GNSSConstellation.from_letter(system)
                logger.debug(
                    "Skipping non-GPS observation types",
                    system=constellation.name if constellation else system,
                )
            return

        count, end = parse_obs_type_count(data[1:])
        if count <= 0:
            raise InvalidObsTypeCountError(count)
        header.declared_count = count

        # Codes follow the count field (column 8 in aligned records)
        offset = end + 1
        self._collect(
            extract_obs_types_from_line(data, offset, 3, 4), header, count
        )

        while len(header.obs_types) < count:
            cont = cursor.next_line()
            if cont is None:
                break
            # continuation records leave the system letter blank
            if V3_TYPES_LABEL not in cont or cont[:1].strip():
                cursor.push_back(cont)
                break
            self._collect(
                extract_obs_types_from_line(
                    header_data(cont, V3_TYPES_LABEL), 0, 3, 4
                ),
                header,
                count,
            )

    def _parse_v2_types(
        self, line: str, cursor: LineCursor, header: ObsHeader
    ) -> None:
        header.type_line_kinds.add(ObsTypeLineKind.V2)

        data = header_data(line, V2_TYPES_LABEL)
        count, end = parse_obs_type_count(data)
        if count <= 0:
            raise InvalidObsTypeCountError(count)
        header.declared_count = count

        offset = end
        self._collect(
            extract_obs_types_from_line(data, offset, 2, 3), header, count
        )

        # Continuation records carry no marker; take as many as the
        # remaining count needs
        missing = count - len(header.obs_types)
        max_lines = math.ceil(missing / RINEX2_CODES_PER_LINE) if missing > 0 else 0
        for _ in range(max_lines):
            if len(header.obs_types) >= count:
                break
            cont = cursor.next_line()
            if cont is None:
                break
            if END_OF_HEADER in cont:
                cursor.push_back(cont)
                break
            self._collect(
                extract_obs_types_from_line(
                    header_data(cont, V2_TYPES_LABEL), 0, 2, 3
                ),
                header,
                count,
            )

    @staticmethod
    def _collect(codes: list[str], header: ObsHeader, count: int) -> None:
        for code in codes:
            if len(header.obs_types) >= count:
                break
            code = trim(code)
            if code:
                header.obs_types.append(code)


def validate_header(header: ObsHeader) -> None:
    """Cross-check a scanned header.

    Raises:
        MissingHeaderError: Terminator, version or type record missing
        IncompatibleObsTypesError: Version and declaration record disagree,
            or codes follow the other version's naming
        InvalidObsTypeCountError: Declared and collected counts disagree
    """
    if not header.terminated:
        raise MissingHeaderError(f"'{END_OF_HEADER}' not found")
    if not header.version_seen:
        raise MissingHeaderError(f"'{VERSION_LABEL}' record not found")
    if not header.type_line_seen:
        raise MissingHeaderError("No observation type declaration found")

    expected = ObsTypeLineKind.V3 if header.is_v3 else ObsTypeLineKind.V2
    wrong = header.type_line_kinds - {expected}
    if wrong:
        raise IncompatibleObsTypesError(
            f"RINEX {header.version_string or '?'} header declares types with "
            f"'{sorted(k.value for k in wrong)[0]}'"
        )

    collected = len(header.obs_types)
    if header.declared_count <= 0 or collected == 0:
        raise InvalidObsTypeCountError(header.declared_count, collected)
    if collected != header.declared_count:
        raise InvalidObsTypeCountError(header.declared_count, collected)

    if header.is_v3:
        bad = [c for c in header.obs_types if c in RINEX2_BARE_CODES]
        if bad:
            raise IncompatibleObsTypesError(
                f"RINEX 2 observation codes in RINEX 3 header: {bad}", bad
            )
    else:
        bad = [c for c in header.obs_types if c[-1] in RINEX3_ATTRIBUTE_SUFFIXES]
        if bad:
            raise IncompatibleObsTypesError(
                f"RINEX 3 observation codes in RINEX 2 header: {bad}", bad
            )
