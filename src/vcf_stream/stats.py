"""Summary statistics over parsed variant records.

``compute_stats`` is a single pass. ``compute_stats_parallel`` splits the
records into contiguous chunks, folds each chunk on a worker thread and merges
the partial results in chunk order, so the chromosome list keeps the same
first-seen order as the sequential fold.
"""

import logging
import os
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from .models import VariantRecord, VariantType

logger = logging.getLogger(__name__)


@dataclass
class VcfStats:
    """Running totals for a set of records."""

    total_records: int = 0
    snps: int = 0
    insertions: int = 0
    deletions: int = 0
    complex: int = 0
    passed_filter: int = 0
    failed_filter: int = 0
    chromosomes: list[str] = field(default_factory=list)
    _seen_chromosomes: set[str] = field(default_factory=set, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._seen_chromosomes = set(self.chromosomes)

    def _add_chromosome(self, chrom: str) -> None:
        if chrom not in self._seen_chromosomes:
            self._seen_chromosomes.add(chrom)
            self.chromosomes.append(chrom)

    def update(self, record: VariantRecord) -> None:
        """Fold one record into the totals."""
        self.total_records += 1

        variant_type = record.variant_type
        if variant_type is VariantType.SNP:
            self.snps += 1
        elif variant_type is VariantType.INSERTION:
            self.insertions += 1
        elif variant_type is VariantType.DELETION:
            self.deletions += 1
        elif variant_type is VariantType.COMPLEX:
            self.complex += 1

        if record.filter.is_pass:
            self.passed_filter += 1
        elif record.filter.is_failed:
            self.failed_filter += 1

        self._add_chromosome(record.chrom)

    def merge(self, other: "VcfStats") -> "VcfStats":
        """Add ``other`` into this instance; ``other``'s new chromosomes go last."""
        self.total_records += other.total_records
        self.snps += other.snps
        self.insertions += other.insertions
        self.deletions += other.deletions
        self.complex += other.complex
        self.passed_filter += other.passed_filter
        self.failed_filter += other.failed_filter
        for chrom in other.chromosomes:
            self._add_chromosome(chrom)
        return self

    def to_dict(self) -> dict:
        return {
            "total_records": self.total_records,
            "snps": self.snps,
            "insertions": self.insertions,
            "deletions": self.deletions,
            "complex": self.complex,
            "passed_filter": self.passed_filter,
            "failed_filter": self.failed_filter,
            "chromosomes": list(self.chromosomes),
        }


def compute_stats(records: Iterable[VariantRecord]) -> VcfStats:
    """Calculate statistics from VCF records."""
    stats = VcfStats()
    for record in records:
        stats.update(record)
    return stats


def _chunk(records: Sequence[VariantRecord], chunk_size: int) -> list[Sequence[VariantRecord]]:
    return [records[i:i + chunk_size] for i in range(0, len(records), chunk_size)]


def compute_stats_parallel(
    records: Sequence[VariantRecord],
    workers: int | None = None,
    chunk_size: int | None = None,
) -> VcfStats:
    """Calculate statistics from VCF records using a pool of worker threads.

    Args:
        records: Already-parsed records; they are only read.
        workers: Number of worker threads (defaults to the CPU count).
        chunk_size: Records per chunk (defaults to an even split across workers).

    Returns:
        The same VcfStats that ``compute_stats`` returns for ``records``.
    """
    if workers is None:
        workers = os.cpu_count() or 1
    if workers < 1:
        raise ValueError(f"workers must be positive, got {workers}")
    if chunk_size is not None and chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    if not records:
        return VcfStats()

    chunk_size = chunk_size or max(1, -(-len(records) // workers))
    chunks = _chunk(records, chunk_size)
    logger.debug("Computing stats over %d records in %d chunks", len(records), len(chunks))

    with ThreadPoolExecutor(max_workers=workers) as executor:
        partials = list(executor.map(compute_stats, chunks))

    result = VcfStats()
    for partial in partials:
        result.merge(partial)
    return result
