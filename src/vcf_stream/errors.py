"""Error taxonomy and warning types for VCF parsing.

Errors fall into two groups. Recoverable errors describe a single bad data
line (too few fields, unparsable POS or QUAL, missing field) and may be turned
into a ``ParseWarning`` when the parser runs with ``skip_invalid``. Everything
else (missing header, I/O, encoding, serialization) always aborts the parse.
"""

from dataclasses import dataclass
from enum import Enum


class VCFError(Exception):
    """Base class for all VCF parsing errors."""

    recoverable: bool = False

    def is_recoverable(self) -> bool:
        return self.recoverable


class VCFIOError(VCFError):
    """Raised when the underlying line source fails."""

    def __init__(self, message: str):
        super().__init__(f"IO error: {message}")


class EncodingError(VCFError):
    """Raised when input bytes are not valid UTF-8."""

    def __init__(self, message: str):
        super().__init__(f"UTF-8 encoding error: {message}")


class InvalidFormatError(VCFError):
    """Raised for structurally invalid input."""

    def __init__(self, message: str):
        super().__init__(f"Invalid VCF format: {message}")


class MissingHeaderError(VCFError):
    """Raised when no #CHROM line precedes the data lines."""

    def __init__(self):
        super().__init__("Missing required header")


class InvalidHeaderError(VCFError):
    """Raised when the #CHROM line is malformed."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Invalid header line: {message}")


class InvalidRecordError(VCFError):
    """Raised when a data line does not have the fixed columns."""

    recoverable = True

    def __init__(self, line: int, message: str):
        self.line = line
        self.message = message
        super().__init__(f"Invalid record at line {line}: {message}")


class MissingFieldError(VCFError):
    """Raised when a required column is absent."""

    recoverable = True

    def __init__(self, line: int, field: str):
        self.line = line
        self.field = field
        super().__init__(f"Missing required field '{field}' at line {line}")


class InvalidPositionError(VCFError):
    """Raised when POS is not a positive integer."""

    recoverable = True

    def __init__(self, line: int, value: str):
        self.line = line
        self.value = value
        super().__init__(f"Invalid position '{value}' at line {line}")


class InvalidQualityError(VCFError):
    """Raised when QUAL is neither '.' nor a float."""

    recoverable = True

    def __init__(self, line: int, value: str):
        self.line = line
        self.value = value
        super().__init__(f"Invalid quality score '{value}' at line {line}")


class UnknownChromosomeError(VCFError):
    """Raised by callers that validate CHROM against declared contigs."""

    def __init__(self, chrom: str):
        self.chrom = chrom
        super().__init__(f"Unknown chromosome: {chrom}")


class ParseError(VCFError):
    """Generic parse failure."""

    def __init__(self, message: str):
        super().__init__(f"Parse error: {message}")


class SerializationError(VCFError):
    """Raised when parsed results cannot be serialized."""

    def __init__(self, message: str):
        super().__init__(f"Serialization error: {message}")


class WarningCategory(Enum):
    """Coarse category attached to each parse warning."""

    MISSING_INFO = "missing_info"
    UNKNOWN_FILTER = "unknown_filter"
    MALFORMED_GENOTYPE = "malformed_genotype"
    DEPRECATED_FORMAT = "deprecated_format"
    OTHER = "other"


@dataclass(frozen=True)
class ParseWarning:
    """A non-fatal issue found while parsing, tied to a 1-based line number."""

    line: int
    message: str
    category: WarningCategory = WarningCategory.OTHER

    def __str__(self) -> str:
        return f"line {self.line}: {self.message}"
