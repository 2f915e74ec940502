"""vcf-stream: streaming VCF parser with typed INFO values and fault tolerance."""

__version__ = "0.1.0"

from .errors import (  # noqa: E402
    EncodingError,
    InvalidFormatError,
    InvalidHeaderError,
    InvalidPositionError,
    InvalidQualityError,
    InvalidRecordError,
    MissingFieldError,
    MissingHeaderError,
    ParseError,
    ParseWarning,
    SerializationError,
    UnknownChromosomeError,
    VCFError,
    VCFIOError,
    WarningCategory,
)
from .genotype import Genotype  # noqa: E402
from .header import VCFHeaderParser, parse_structured_field  # noqa: E402
from .info import infer_info_value, parse_info_field  # noqa: E402
from .models import (  # noqa: E402
    ContigInfo,
    FilterDefinition,
    FilterState,
    FilterStatus,
    FormatDefinition,
    InfoDefinition,
    InfoType,
    InfoValue,
    SampleData,
    VariantRecord,
    VariantType,
    VCFHeader,
    classify_variant,
)
from .record import VariantParser  # noqa: E402
from .stats import VcfStats, compute_stats, compute_stats_parallel  # noqa: E402
from .vcf_parser import (  # noqa: E402
    FaultPolicy,
    ParseResult,
    ParserConfig,
    VCFParser,
    VCFStreamingParser,
    get_stats,
    parse,
    parse_streaming,
    parse_with_stats,
)

__all__ = [
    "__version__",
    "ContigInfo",
    "EncodingError",
    "FaultPolicy",
    "FilterDefinition",
    "FilterState",
    "FilterStatus",
    "FormatDefinition",
    "Genotype",
    "InfoDefinition",
    "InfoType",
    "InfoValue",
    "InvalidFormatError",
    "InvalidHeaderError",
    "InvalidPositionError",
    "InvalidQualityError",
    "InvalidRecordError",
    "MissingFieldError",
    "MissingHeaderError",
    "ParseError",
    "ParseResult",
    "ParseWarning",
    "ParserConfig",
    "SampleData",
    "SerializationError",
    "UnknownChromosomeError",
    "VCFError",
    "VCFHeader",
    "VCFHeaderParser",
    "VCFIOError",
    "VCFParser",
    "VCFStreamingParser",
    "VariantParser",
    "VariantRecord",
    "VariantType",
    "VcfStats",
    "WarningCategory",
    "classify_variant",
    "compute_stats",
    "compute_stats_parallel",
    "get_stats",
    "infer_info_value",
    "parse",
    "parse_info_field",
    "parse_streaming",
    "parse_structured_field",
    "parse_with_stats",
]
