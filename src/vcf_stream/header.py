"""VCF header parsing."""

import logging
import re
from collections.abc import Iterator

from .errors import InvalidHeaderError, MissingHeaderError
from .models import (
    ContigInfo,
    FilterDefinition,
    FormatDefinition,
    InfoDefinition,
    VCFHeader,
)

logger = logging.getLogger(__name__)

META_PREFIX = "##"
COLUMN_HEADER_PREFIX = "#CHROM"
MIN_HEADER_COLUMNS = 8
SAMPLE_COLUMN_OFFSET = 9

_LENGTH_PATTERN = re.compile(r"[0-9]{1,18}")


def parse_structured_field(value: str) -> dict[str, str] | None:
    """Parse a structured value like '<ID=AC,Number=A,Description="...">'.

    Returns None when the value is not wrapped in angle brackets. Quoted
    values may contain commas and '='; the quotes themselves are dropped and
    no whitespace is trimmed. The last pair is kept without a trailing comma.
    """
    if not value.startswith("<") or not value.endswith(">") or len(value) < 2:
        return None

    fields: dict[str, str] = {}
    key: list[str] = []
    current: list[str] = []
    in_quotes = False
    in_value = False

    for char in value[1:-1]:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "=" and not in_quotes and not in_value:
            in_value = True
        elif char == "," and not in_quotes:
            if key:
                fields["".join(key)] = "".join(current)
            key.clear()
            current.clear()
            in_value = False
        elif in_value:
            current.append(char)
        else:
            key.append(char)

    if key:
        fields["".join(key)] = "".join(current)

    return fields


def _parse_length(value: str | None) -> int | None:
    if value is None or not _LENGTH_PATTERN.fullmatch(value):
        return None
    return int(value)


class VCFHeaderParser:
    """Parser for VCF header information.

    Consumes lines up to and including the #CHROM line. ``line_number`` holds
    the 1-based number of the last line consumed so record parsing can carry
    on counting from there.
    """

    def __init__(self) -> None:
        self.line_number = 0

    def parse(self, lines: Iterator[str]) -> VCFHeader:
        """Build a VCFHeader from the leading lines of ``lines``.

        Raises:
            MissingHeaderError: If input ends, or a data line appears, before
                the #CHROM line.
            InvalidHeaderError: If the #CHROM line has fewer than 8 columns.
        """
        header = VCFHeader()

        for line in lines:
            self.line_number += 1

            if line.startswith(META_PREFIX):
                header.meta_lines.append(line)
                self.parse_meta_line(line, header)
            elif line.startswith(COLUMN_HEADER_PREFIX):
                self.parse_header_line(line, header)
                logger.debug(
                    "Header complete at line %d: %d samples, %d INFO, %d FORMAT definitions",
                    self.line_number,
                    len(header.samples),
                    len(header.info_fields),
                    len(header.format_fields),
                )
                return header
            elif line:
                logger.debug("Data line before #CHROM at line %d", self.line_number)
                raise MissingHeaderError()

        raise MissingHeaderError()

    def parse_meta_line(self, line: str, header: VCFHeader) -> None:
        """Route a ##key=value line into the header.

        Unknown keys are only kept in ``header.meta_lines``.
        """
        content = line[len(META_PREFIX):]
        key, sep, value = content.partition("=")
        if not sep:
            return

        if key == "fileformat":
            header.file_format = value
        elif key == "reference":
            header.reference = value
        elif key == "contig":
            fields = parse_structured_field(value)
            if fields is not None:
                header.contigs.append(
                    ContigInfo(id=fields.get("ID", ""), length=_parse_length(fields.get("length")))
                )
        elif key == "INFO":
            fields = parse_structured_field(value)
            if fields is not None:
                header.info_fields.append(
                    InfoDefinition(
                        id=fields.get("ID", ""),
                        number=fields.get("Number", ""),
                        type=fields.get("Type", ""),
                        description=fields.get("Description", ""),
                    )
                )
        elif key == "FORMAT":
            fields = parse_structured_field(value)
            if fields is not None:
                header.format_fields.append(
                    FormatDefinition(
                        id=fields.get("ID", ""),
                        number=fields.get("Number", ""),
                        type=fields.get("Type", ""),
                        description=fields.get("Description", ""),
                    )
                )
        elif key == "FILTER":
            fields = parse_structured_field(value)
            if fields is not None:
                header.filters.append(
                    FilterDefinition(
                        id=fields.get("ID", ""), description=fields.get("Description", "")
                    )
                )

    def parse_header_line(self, line: str, header: VCFHeader) -> None:
        """Parse the #CHROM line and record sample names in column order."""
        columns = line.split("\t")
        if len(columns) < MIN_HEADER_COLUMNS:
            raise InvalidHeaderError(
                f"Header line must have at least {MIN_HEADER_COLUMNS} columns"
            )
        header.samples = tuple(columns[SAMPLE_COLUMN_OFFSET:])
