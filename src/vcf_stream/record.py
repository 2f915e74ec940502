"""Parsing of individual VCF data lines."""

import logging
import re

from .errors import (
    InvalidPositionError,
    InvalidQualityError,
    InvalidRecordError,
    MissingFieldError,
)
from .genotype import Genotype
from .info import parse_float, parse_info_field
from .models import FilterStatus, SampleData, VariantRecord, VCFHeader

logger = logging.getLogger(__name__)

MIN_RECORD_FIELDS = 8
MISSING_VALUE = "."
GENOTYPE_KEY = "GT"

_POSITION_PATTERN = re.compile(r"[0-9]{1,18}")


class VariantParser:
    """Parser for individual VCF variant records.

    INFO inference and sample decoding can be switched off for speed; the
    record then carries an empty ``info`` mapping or ``samples`` list.
    """

    def __init__(self, parse_info: bool = True, parse_samples: bool = True):
        self.parse_info = parse_info
        self.parse_samples = parse_samples

    def parse_variant(self, line: str, line_number: int, header: VCFHeader) -> VariantRecord:
        """Parse one non-empty data line.

        Args:
            line: The data line without its line terminator.
            line_number: 1-based line number used in error messages.
            header: Header whose sample names label the sample columns.

        Raises:
            InvalidRecordError: Fewer than 8 tab-separated fields.
            MissingFieldError: Empty CHROM, POS or REF.
            InvalidPositionError: POS is not a positive integer.
        """
        fields = line.split("\t")
        if len(fields) < MIN_RECORD_FIELDS:
            raise InvalidRecordError(
                line_number,
                f"Expected at least {MIN_RECORD_FIELDS} fields, found {len(fields)}",
            )

        chrom, pos_str, id_str, ref, alt_str, qual_str, filter_str, info_str = fields[:8]

        for name, value in (("CHROM", chrom), ("POS", pos_str), ("REF", ref)):
            if not value:
                raise MissingFieldError(line_number, name)

        if not _POSITION_PATTERN.fullmatch(pos_str) or int(pos_str) < 1:
            raise InvalidPositionError(line_number, pos_str)

        return VariantRecord(
            chrom=chrom,
            pos=int(pos_str),
            id=None if id_str == MISSING_VALUE else id_str,
            ref=ref,
            alts=[] if alt_str == MISSING_VALUE else alt_str.split(","),
            qual=self._parse_quality(qual_str, line_number),
            filter=FilterStatus.parse(filter_str),
            info=parse_info_field(info_str) if self.parse_info else {},
            samples=(
                self._parse_samples(fields[8:], header.samples)
                if self.parse_samples and len(fields) > 9
                else []
            ),
        )

    def _parse_quality(self, value: str, line_number: int) -> float | None:
        """Parse QUAL; an unparsable value degrades to None instead of failing the record."""
        if value == MISSING_VALUE:
            return None
        qual = parse_float(value)
        if qual is None:
            error = InvalidQualityError(line_number, value)
            logger.debug("%s; treating QUAL as missing", error)
        return qual

    def _parse_samples(
        self, columns: list[str], sample_names: tuple[str, ...]
    ) -> list[SampleData]:
        """Zip each sample column against the FORMAT keys in ``columns[0]``."""
        format_keys = columns[0].split(":")
        samples = []

        for i, column in enumerate(columns[1:]):
            name = sample_names[i] if i < len(sample_names) else f"SAMPLE_{i}"
            sample = SampleData(name=name)

            for key, value in zip(format_keys, column.split(":"), strict=False):
                if key == GENOTYPE_KEY:
                    sample.genotype = Genotype.parse(value)
                else:
                    sample.fields[key] = value

            samples.append(sample)

        return samples
