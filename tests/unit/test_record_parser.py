"""Tests for single data-line parsing."""

import pytest

from vcf_stream.errors import (
    InvalidPositionError,
    InvalidRecordError,
    MissingFieldError,
)
from vcf_stream.models import FilterStatus, InfoValue, VariantType, VCFHeader
from vcf_stream.record import VariantParser

HEADER = VCFHeader(samples=("S1", "S2"))


def line(*fields: str) -> str:
    return "\t".join(fields)


class TestFixedFields:
    def test_basic_record(self):
        record = VariantParser().parse_variant(
            line("chr1", "100", "rs123", "A", "G", "30", "PASS", "DP=50"), 1, HEADER
        )
        assert record.chrom == "chr1"
        assert record.pos == 100
        assert record.id == "rs123"
        assert record.ref == "A"
        assert record.alts == ["G"]
        assert record.qual == 30.0
        assert record.filter == FilterStatus.passed()
        assert record.info == {"DP": InfoValue.integer(50)}
        assert record.samples == []
        assert record.variant_type is VariantType.SNP

    def test_missing_markers(self):
        record = VariantParser().parse_variant(
            line("chr1", "100", ".", "A", ".", ".", ".", "."), 1, HEADER
        )
        assert record.id is None
        assert record.alts == []
        assert record.qual is None
        assert record.filter.is_missing
        assert record.info == {}

    def test_multiallelic_alts(self):
        record = VariantParser().parse_variant(
            line("chr2", "300", ".", "C", "T,G", "50", "q10;LowQual", "."), 1, HEADER
        )
        assert record.alts == ["T", "G"]
        assert record.filter == FilterStatus.failed(["q10", "LowQual"])
        assert record.filter_string == "q10;LowQual"

    def test_unparsable_quality_degrades_to_none(self):
        record = VariantParser().parse_variant(
            line("chr1", "100", ".", "A", "G", "high", "PASS", "."), 1, HEADER
        )
        assert record.qual is None
        assert record.alts == ["G"]


class TestRecordErrors:
    def test_too_few_fields(self):
        with pytest.raises(InvalidRecordError) as exc_info:
            VariantParser().parse_variant(line("chr1", "100", ".", "A"), 12, HEADER)
        assert exc_info.value.line == 12
        assert "Expected at least 8 fields, found 4" in str(exc_info.value)

    @pytest.mark.parametrize(
        "pos", ["abc", "-5", "1.5", "0", "\u00b2", pytest.param("1" * 5000, id="oversized")]
    )
    def test_invalid_position(self, pos):
        with pytest.raises(InvalidPositionError) as exc_info:
            VariantParser().parse_variant(
                line("chr1", pos, ".", "A", "G", ".", ".", "."), 3, HEADER
            )
        assert exc_info.value.value == pos
        assert exc_info.value.line == 3

    @pytest.mark.parametrize("index,name", [(0, "CHROM"), (1, "POS"), (3, "REF")])
    def test_empty_required_field(self, index, name):
        fields = ["chr1", "100", ".", "A", "G", ".", ".", "."]
        fields[index] = ""
        with pytest.raises(MissingFieldError) as exc_info:
            VariantParser().parse_variant(line(*fields), 8, HEADER)
        assert exc_info.value.field == name


class TestSamples:
    def test_samples_zip_with_format(self):
        record = VariantParser().parse_variant(
            line("chr1", "100", ".", "A", "G", "30", "PASS", ".", "GT:DP", "0/1:25", "1|1:30"),
            1,
            HEADER,
        )
        s1, s2 = record.samples
        assert s1.name == "S1"
        assert s1.genotype.alleles == (0, 1)
        assert s1.fields == {"DP": "25"}
        assert s2.genotype.phased
        assert "GT" not in s2.fields

    def test_gt_not_first(self):
        record = VariantParser().parse_variant(
            line("chr1", "100", ".", "A", "G", "30", "PASS", ".", "DP:GT", "25:0/1", "30:./."),
            1,
            HEADER,
        )
        assert record.samples[0].genotype.alleles == (0, 1)
        assert record.samples[1].genotype is None
        assert record.samples[1].fields == {"DP": "30"}

    def test_fewer_values_than_keys(self):
        record = VariantParser().parse_variant(
            line("chr1", "100", ".", "A", "G", "30", "PASS", ".", "GT:DP:GQ", "0/1", "1/1:3"),
            1,
            HEADER,
        )
        assert record.samples[0].fields == {}
        assert record.samples[1].fields == {"DP": "3"}

    def test_extra_values_ignored(self):
        record = VariantParser().parse_variant(
            line("chr1", "100", ".", "A", "G", "30", "PASS", ".", "GT", "0/1:99", "0/0"),
            1,
            HEADER,
        )
        assert record.samples[0].fields == {}

    def test_undeclared_samples_get_default_names(self):
        record = VariantParser().parse_variant(
            line("chr1", "100", ".", "A", "G", "30", "PASS", ".", "GT", "0/1", "0/0", "1/1"),
            1,
            HEADER,
        )
        assert [s.name for s in record.samples] == ["S1", "S2", "SAMPLE_2"]

    def test_format_column_without_samples(self):
        record = VariantParser().parse_variant(
            line("chr1", "100", ".", "A", "G", "30", "PASS", ".", "GT"), 1, HEADER
        )
        assert record.samples == []


class TestToggles:
    def test_info_disabled(self):
        parser = VariantParser(parse_info=False)
        record = parser.parse_variant(
            line("chr1", "100", ".", "A", "G", "30", "PASS", "DP=5"), 1, HEADER
        )
        assert record.info == {}

    def test_samples_disabled(self):
        parser = VariantParser(parse_samples=False)
        record = parser.parse_variant(
            line("chr1", "100", ".", "A", "G", "30", "PASS", ".", "GT", "0/1", "0/0"), 1, HEADER
        )
        assert record.samples == []
