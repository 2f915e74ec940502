"""Tests for the statistics fold and its parallel variant."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from vcf_stream.models import FilterStatus, VariantRecord
from vcf_stream.stats import VcfStats, compute_stats, compute_stats_parallel


def make_record(chrom: str, ref: str, alts: list[str], filter_value: str = "PASS"):
    record = VariantRecord.create(chrom, 1, ref, alts)
    record.filter = FilterStatus.parse(filter_value)
    return record


records_strategy = st.lists(
    st.builds(
        make_record,
        st.sampled_from(["chr1", "chr2", "chr3", "chrX"]),
        st.sampled_from(["A", "AT", "C"]),
        st.lists(st.sampled_from(["G", "A", "ATT", "CTT", "*"]), max_size=2),
        st.sampled_from(["PASS", ".", "q10", "q10;LowQual"]),
    ),
    max_size=60,
)


class TestComputeStats:
    def test_counts(self):
        records = [
            make_record("chr1", "A", ["G"]),
            make_record("chr1", "AT", ["A"]),
            make_record("chr2", "C", ["T", "G"], "q10"),
            make_record("chr2", "C", ["CTT"], "."),
            make_record("chr3", "AT", ["A", "ATT"]),
        ]
        stats = compute_stats(records)
        assert stats.to_dict() == {
            "total_records": 5,
            "snps": 2,
            "insertions": 1,
            "deletions": 1,
            "complex": 1,
            "passed_filter": 3,
            "failed_filter": 1,
            "chromosomes": ["chr1", "chr2", "chr3"],
        }

    def test_empty(self):
        assert compute_stats([]) == VcfStats()

    def test_chromosomes_first_seen_order(self):
        records = [make_record(c, "A", ["G"]) for c in ["chr2", "chr1", "chr2", "chrX"]]
        assert compute_stats(records).chromosomes == ["chr2", "chr1", "chrX"]


class TestMerge:
    def test_merge_appends_new_chromosomes(self):
        left = compute_stats([make_record("chr2", "A", ["G"])])
        right = compute_stats([make_record("chr1", "A", ["G"]), make_record("chr2", "AT", ["A"])])
        merged = left.merge(right)
        assert merged.total_records == 3
        assert merged.deletions == 1
        assert merged.chromosomes == ["chr2", "chr1"]

    def test_merge_into_empty(self):
        other = compute_stats([make_record("chr1", "A", ["G"])])
        assert VcfStats().merge(other) == other


class TestComputeStatsParallel:
    @settings(max_examples=50, deadline=None)
    @given(records_strategy, st.integers(min_value=1, max_value=4), st.integers(min_value=1, max_value=7))
    def test_matches_sequential(self, records, workers, chunk_size):
        assert compute_stats_parallel(records, workers, chunk_size) == compute_stats(records)

    def test_default_chunking(self):
        records = [make_record(f"chr{i % 5}", "A", ["G"]) for i in range(100)]
        assert compute_stats_parallel(records) == compute_stats(records)

    def test_empty(self):
        assert compute_stats_parallel([], workers=2) == VcfStats()

    @pytest.mark.parametrize("kwargs", [{"workers": 0}, {"workers": -1}, {"chunk_size": 0}])
    def test_invalid_arguments(self, kwargs):
        with pytest.raises(ValueError):
            compute_stats_parallel([make_record("chr1", "A", ["G"])], **kwargs)
