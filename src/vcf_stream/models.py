"""Data models for VCF headers and variant records."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .genotype import Genotype

FIXED_COLUMNS = ["#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO"]
OVERLAPPING_DELETION = "*"


@dataclass
class ContigInfo:
    """A ##contig declaration."""

    id: str
    length: int | None = None


@dataclass
class InfoDefinition:
    """A ##INFO declaration."""

    id: str
    number: str = ""
    type: str = ""
    description: str = ""


@dataclass
class FormatDefinition:
    """A ##FORMAT declaration."""

    id: str
    number: str = ""
    type: str = ""
    description: str = ""


@dataclass
class FilterDefinition:
    """A ##FILTER declaration."""

    id: str
    description: str = ""


@dataclass
class VCFHeader:
    """Parsed VCF header.

    ``samples`` is a tuple so the column order cannot change once the
    #CHROM line has been read. ``meta_lines`` keeps every ## line verbatim,
    including keys the parser does not interpret.
    """

    file_format: str = "4.2"
    reference: str | None = None
    contigs: list[ContigInfo] = field(default_factory=list)
    info_fields: list[InfoDefinition] = field(default_factory=list)
    format_fields: list[FormatDefinition] = field(default_factory=list)
    filters: list[FilterDefinition] = field(default_factory=list)
    samples: tuple[str, ...] = ()
    meta_lines: list[str] = field(default_factory=list)

    def info(self, field_id: str) -> InfoDefinition | None:
        return next((d for d in self.info_fields if d.id == field_id), None)

    def format(self, field_id: str) -> FormatDefinition | None:
        return next((d for d in self.format_fields if d.id == field_id), None)

    def filter(self, filter_id: str) -> FilterDefinition | None:
        return next((d for d in self.filters if d.id == filter_id), None)

    def contig(self, contig_id: str) -> ContigInfo | None:
        return next((c for c in self.contigs if c.id == contig_id), None)

    def column_header(self) -> str:
        """Rebuild the #CHROM line."""
        columns = list(FIXED_COLUMNS)
        if self.samples:
            columns.append("FORMAT")
            columns.extend(self.samples)
        return "\t".join(columns)

    def to_lines(self) -> list[str]:
        """Return the header as it would be written back to a file."""
        return [*self.meta_lines, self.column_header()]


class FilterState(Enum):
    PASS = "PASS"
    MISSING = "."
    FAILED = "FAILED"


@dataclass(frozen=True)
class FilterStatus:
    """Outcome of the FILTER column: passed, not recorded, or failed.

    Failed statuses always name at least one filter.
    """

    state: FilterState
    filters: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.state is FilterState.FAILED and not self.filters:
            raise ValueError("A failed filter status needs at least one filter name")
        if self.state is not FilterState.FAILED and self.filters:
            raise ValueError(f"{self.state.name} filter status cannot carry filter names")

    @classmethod
    def passed(cls) -> "FilterStatus":
        return cls(FilterState.PASS)

    @classmethod
    def missing(cls) -> "FilterStatus":
        return cls(FilterState.MISSING)

    @classmethod
    def failed(cls, filters: list[str] | tuple[str, ...]) -> "FilterStatus":
        return cls(FilterState.FAILED, tuple(filters))

    @classmethod
    def parse(cls, value: str) -> "FilterStatus":
        """Classify a raw FILTER column value."""
        if value == ".":
            return cls.missing()
        if value == "PASS":
            return cls.passed()
        return cls.failed(value.split(";"))

    @property
    def is_pass(self) -> bool:
        return self.state is FilterState.PASS

    @property
    def is_missing(self) -> bool:
        return self.state is FilterState.MISSING

    @property
    def is_failed(self) -> bool:
        return self.state is FilterState.FAILED

    def __str__(self) -> str:
        if self.is_failed:
            return ";".join(self.filters)
        return self.state.value


class InfoType(Enum):
    FLAG = "Flag"
    INTEGER = "Integer"
    FLOAT = "Float"
    STRING = "String"
    INTEGER_ARRAY = "IntegerArray"
    FLOAT_ARRAY = "FloatArray"
    STRING_ARRAY = "StringArray"


ARRAY_TYPES = frozenset({InfoType.INTEGER_ARRAY, InfoType.FLOAT_ARRAY, InfoType.STRING_ARRAY})


@dataclass(frozen=True)
class InfoValue:
    """A typed INFO value. Flags carry no payload; arrays are tuples."""

    type: InfoType
    value: Any = None

    @classmethod
    def flag(cls) -> "InfoValue":
        return cls(InfoType.FLAG)

    @classmethod
    def integer(cls, value: int) -> "InfoValue":
        return cls(InfoType.INTEGER, value)

    @classmethod
    def floating(cls, value: float) -> "InfoValue":
        return cls(InfoType.FLOAT, value)

    @classmethod
    def string(cls, value: str) -> "InfoValue":
        return cls(InfoType.STRING, value)

    @classmethod
    def integer_array(cls, values) -> "InfoValue":
        return cls(InfoType.INTEGER_ARRAY, tuple(values))

    @classmethod
    def float_array(cls, values) -> "InfoValue":
        return cls(InfoType.FLOAT_ARRAY, tuple(values))

    @classmethod
    def string_array(cls, values) -> "InfoValue":
        return cls(InfoType.STRING_ARRAY, tuple(values))

    @property
    def is_flag(self) -> bool:
        return self.type is InfoType.FLAG

    @property
    def is_array(self) -> bool:
        return self.type in ARRAY_TYPES

    def to_python(self) -> Any:
        """Plain Python value: True for flags, lists for arrays."""
        if self.is_flag:
            return True
        if self.is_array:
            return list(self.value)
        return self.value


@dataclass
class SampleData:
    """Per-sample columns of one record.

    Only GT is decoded; every other FORMAT key keeps its raw string.
    """

    name: str
    genotype: Genotype | None = None
    fields: dict[str, str] = field(default_factory=dict)


class VariantType(Enum):
    SNP = "SNP"
    INSERTION = "INS"
    DELETION = "DEL"
    COMPLEX = "COMPLEX"
    OTHER = "OTHER"


def is_snp(ref: str, alts: list[str]) -> bool:
    return len(ref) == 1 and all(len(a) == 1 and a != OVERLAPPING_DELETION for a in alts)


def is_insertion(ref: str, alts: list[str]) -> bool:
    return any(len(a) > len(ref) for a in alts)


def is_deletion(ref: str, alts: list[str]) -> bool:
    return any(len(a) < len(ref) for a in alts)


def classify_variant(ref: str, alts: list[str]) -> VariantType:
    """Classify by allele lengths alone; no alignment is attempted."""
    if is_snp(ref, alts):
        return VariantType.SNP
    insertion = is_insertion(ref, alts)
    deletion = is_deletion(ref, alts)
    if insertion and deletion:
        return VariantType.COMPLEX
    if insertion:
        return VariantType.INSERTION
    if deletion:
        return VariantType.DELETION
    return VariantType.OTHER


@dataclass
class VariantRecord:
    """Represents a single VCF data line."""

    chrom: str
    pos: int
    ref: str
    alts: list[str] = field(default_factory=list)
    id: str | None = None
    qual: float | None = None
    filter: FilterStatus = field(default_factory=FilterStatus.passed)
    info: dict[str, InfoValue] = field(default_factory=dict)
    samples: list[SampleData] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.pos < 1:
            raise ValueError(f"VCF positions are 1-based, got {self.pos}")

    @classmethod
    def create(cls, chrom: str, pos: int, ref: str, alts: list[str]) -> "VariantRecord":
        """Build a PASS record with no INFO or sample data."""
        return cls(chrom=chrom, pos=pos, ref=ref, alts=list(alts))

    @property
    def is_snp(self) -> bool:
        return is_snp(self.ref, self.alts)

    @property
    def is_insertion(self) -> bool:
        return is_insertion(self.ref, self.alts)

    @property
    def is_deletion(self) -> bool:
        return is_deletion(self.ref, self.alts)

    @property
    def variant_type(self) -> VariantType:
        return classify_variant(self.ref, self.alts)

    @property
    def filter_string(self) -> str:
        return str(self.filter)

    @property
    def end_pos(self) -> int:
        """Last reference base covered by REF (inclusive)."""
        return self.pos + len(self.ref) - 1

    def sample(self, name: str) -> SampleData | None:
        return next((s for s in self.samples if s.name == name), None)
