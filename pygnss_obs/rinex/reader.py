"""
RINEX observation file reader.

Entry points:

- ``parse(path)`` returns a ``ParseResult`` value and never raises for
  parse failures; the failure category is in ``result.error_kind``.
- ``RinexObsReader.read(path)`` returns the ``ParsedObservationFile``
  and raises the exceptions of ``pygnss_obs.core.exceptions``.

Usage:
    from pygnss_obs import parse

    result = parse("/path/to/site0150.24o")
    if result.success:
        for epoch in result.observations.epochs:
            print(epoch.timestamp, epoch.measurements.get("G07"))
    else:
        print(result.error_kind.value, result.error)
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Generator, Iterable, Optional

from pygnss_obs.core.config import ParserConfig
from pygnss_obs.core.exceptions import (
    NoEpochsError,
    ObsFileDecodeError,
    ObsFileNotFoundError,
    ParseErrorKind,
    PyGNSSObsError,
)
from pygnss_obs.rinex.epochs import EpochParser, select_strategy
from pygnss_obs.rinex.header import HeaderParser, LineCursor, ObsHeader
from pygnss_obs.rinex.models import ParsedObservationFile
from pygnss_obs.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ParseResult:
    """Result of a parse operation."""

    success: bool
    observations: Optional[ParsedObservationFile] = None
    error: Optional[PyGNSSObsError] = None

    @property
    def error_kind(self) -> Optional[ParseErrorKind]:
        return self.error.kind if self.error is not None else None


class RinexObsReader:
    """Reader for RINEX 2/3/4 GPS observation files."""

    def __init__(self, config: ParserConfig | None = None):
        """Initialize reader.

        Args:
            config: Parser settings (encoding, RINEX 2 record wrapping)
        """
        self.config = config or ParserConfig()

    @contextmanager
    def open_lines(self, path: Path) -> Generator[LineCursor, None, None]:
        """Open an observation file as a line cursor.

        Args:
            path: Path to the RINEX observation file

        Raises:
            ObsFileNotFoundError: File cannot be opened
            ObsFileDecodeError: File is not valid in the configured encoding
        """
        try:
            f = open(
                path,
                "r",
                encoding=self.config.encoding,
                errors=self.config.encoding_errors,
            )
        except OSError as e:
            raise ObsFileNotFoundError(str(path), f"Cannot open {path}: {e}") from e

        with f:
            try:
                yield LineCursor(f)
            except UnicodeDecodeError as e:
                raise ObsFileDecodeError(str(path), e) from e

    def read(self, path: Path | str) -> ParsedObservationFile:
        """Read and parse an observation file.

        Args:
            path: Path to the RINEX observation file

        Returns:
            ParsedObservationFile with at least one epoch

        Raises:
            ObsFileNotFoundError: File cannot be opened or decoded
            MissingHeaderError: Incomplete header
            InvalidObsTypeCountError: Bad observation type count
            IncompatibleObsTypesError: Codes from the other RINEX version
            NoEpochsError: No complete epoch in the data section
        """
        path = Path(path)
        with self.open_lines(path) as cursor:
            obs = self.read_lines(cursor, source=str(path))

        logger.info(
            "Parsed RINEX observations",
            path=str(path),
            version=obs.version.value,
            epochs=len(obs.epochs),
        )
        return obs

    def read_header(self, path: Path | str) -> ObsHeader:
        """Read and validate only the header of an observation file.

        Raises:
            ObsFileNotFoundError: File cannot be opened or decoded
            MissingHeaderError, InvalidObsTypeCountError,
            IncompatibleObsTypesError: as for ``read``
        """
        with self.open_lines(Path(path)) as cursor:
            return HeaderParser().parse(cursor)

    def read_lines(
        self, lines: Iterable[str], source: Optional[str] = None
    ) -> ParsedObservationFile:
        """Parse observation file content given as lines.

        Args:
            lines: File lines, with or without line terminators, or a
                LineCursor over them
            source: Name reported in errors and in the result

        Returns:
            ParsedObservationFile with at least one epoch
        """
        cursor = lines if isinstance(lines, LineCursor) else LineCursor(lines)

        header = HeaderParser().parse(cursor)
        obs = ParsedObservationFile(
            is_v3=header.is_v3,
            obs_types=list(header.obs_types),
            source=source,
        )

        strategy = select_strategy(header.is_v3, obs.obs_types, self.config)
        obs.epochs = EpochParser(strategy).parse(cursor)

        if not obs.epochs:
            raise NoEpochsError(source)
        return obs


def parse(path: Path | str, config: ParserConfig | None = None) -> ParseResult:
    """Parse a RINEX observation file into a result value.

    Args:
        path: Path to the RINEX observation file
        config: Parser settings

    Returns:
        ParseResult; on failure ``observations`` is None and ``error``
        holds the exception describing the failure
    """
    try:
        obs = RinexObsReader(config).read(path)
    except PyGNSSObsError as e:
        logger.error(
            "RINEX parse failed",
            path=str(path),
            kind=e.kind.value if e.kind else None,
            error=str(e),
        )
        return ParseResult(success=False, error=e)
    return ParseResult(success=True, observations=obs)


def read_rinex_obs(
    path: Path | str, config: ParserConfig | None = None
) -> ParsedObservationFile:
    """Read a RINEX observation file, raising on failure."""
    return RinexObsReader(config).read(path)
