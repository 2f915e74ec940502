"""Tests for GT token decoding and zygosity queries."""

import pytest

from vcf_stream.genotype import Genotype


class TestGenotypeParse:
    """Test Genotype.parse with common tokens."""

    def test_unphased_het(self):
        gt = Genotype.parse("0/1")
        assert gt.alleles == (0, 1)
        assert not gt.phased
        assert gt.is_het()

    def test_phased_hom_alt(self):
        gt = Genotype.parse("1|1")
        assert gt.alleles == (1, 1)
        assert gt.phased
        assert gt.is_hom_alt()

    def test_hom_ref(self):
        gt = Genotype.parse("0/0")
        assert gt.is_hom_ref()
        assert not gt.is_het()
        assert not gt.is_hom_alt()

    @pytest.mark.parametrize("token", [".", "./.", ".|."])
    def test_fully_missing_is_none(self, token):
        assert Genotype.parse(token) is None

    def test_partially_missing(self):
        gt = Genotype.parse("./1")
        assert gt.alleles == (None, 1)
        assert not gt.is_het()
        assert gt.is_hom_alt()
        assert not gt.is_hom_ref()

    def test_haploid(self):
        gt = Genotype.parse("1")
        assert gt.alleles == (1,)
        assert gt.ploidy == 1
        assert not gt.is_het()
        assert gt.is_hom_alt()

    def test_triploid_multiallelic(self):
        gt = Genotype.parse("0/1/2")
        assert gt.alleles == (0, 1, 2)
        assert gt.is_het()

    def test_phased_separator_anywhere_marks_phased(self):
        gt = Genotype.parse("0|1")
        assert gt.phased
        assert gt.alleles == (0, 1)

    def test_non_numeric_allele_is_missing(self):
        gt = Genotype.parse("0/x")
        assert gt.alleles == (0, None)

    def test_het_between_two_alts(self):
        gt = Genotype.parse("1/2")
        assert gt.is_het()
        assert not gt.is_hom_alt()

    def test_hom_ref_ignores_missing_alleles(self):
        assert Genotype.parse("0/.").is_hom_ref()
        assert Genotype.parse(".|0").is_hom_ref()
        assert not Genotype.parse("./1").is_hom_ref()

    def test_haploid_ref_is_hom_ref(self):
        assert Genotype.parse("0").is_hom_ref()

    @pytest.mark.parametrize("token", ["0/\u00b2", "0/\u0663", "0/1x"])
    def test_non_ascii_or_mixed_alleles_are_missing(self, token):
        assert Genotype.parse(token).alleles == (0, None)

    def test_oversized_allele_index_is_missing(self):
        assert Genotype.parse("0/" + "9" * 5000).alleles == (0, None)


class TestGenotypeSerialization:
    @pytest.mark.parametrize("token", ["0/1", "1|1", "./1", "0|.", "2"])
    def test_str_reproduces_token(self, token):
        assert str(Genotype.parse(token)) == token

    def test_called_alleles(self):
        assert Genotype.parse("./1").called_alleles == [1]
