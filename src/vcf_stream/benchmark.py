"""Benchmarking utilities for vcf-stream."""

import gzip
import random
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path

from .vcf_parser import ParserConfig, VCFStreamingParser

CHROMOSOMES = [f"chr{i}" for i in range(1, 23)] + ["chrX", "chrY", "chrM"]
BASES = ["A", "C", "G", "T"]
FILTERS = ["PASS", "PASS", "PASS", "q10", "LowQual", "."]

SYNTHETIC_HEADER = """##fileformat=VCFv4.2
##reference=GRCh38
##INFO=<ID=DP,Number=1,Type=Integer,Description="Total Depth">
##INFO=<ID=AF,Number=A,Type=Float,Description="Allele Frequency">
##INFO=<ID=DB,Number=0,Type=Flag,Description="dbSNP membership">
##FILTER=<ID=q10,Description="Quality below 10">
##FILTER=<ID=LowQual,Description="Low quality">
##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">
##FORMAT=<ID=DP,Number=1,Type=Integer,Description="Read Depth">
"""


@dataclass
class BenchmarkResult:
    """Results from a benchmark run."""

    vcf_path: str
    variant_count: int
    parsing_time: float
    parsing_rate: float
    parse_info: bool = True
    parse_samples: bool = True
    synthetic: bool = False

    def to_dict(self) -> dict:
        return {
            "vcf_path": self.vcf_path,
            "variant_count": self.variant_count,
            "parsing": {
                "time_seconds": round(self.parsing_time, 3),
                "rate_per_second": round(self.parsing_rate, 0),
            },
            "settings": {
                "parse_info": self.parse_info,
                "parse_samples": self.parse_samples,
                "synthetic": self.synthetic,
            },
        }


def _random_alleles(rng: random.Random) -> tuple[str, str]:
    ref = rng.choice(BASES)
    alt = rng.choice([b for b in BASES if b != ref])

    roll = rng.random()
    if roll < 0.1:
        ref = ref + "".join(rng.choices(BASES, k=rng.randint(1, 5)))
    elif roll < 0.2:
        alt = alt + "".join(rng.choices(BASES, k=rng.randint(1, 5)))
    elif roll < 0.25:
        alt = alt + "," + rng.choice([b for b in BASES if b not in (ref, alt)])

    return ref, alt


def generate_synthetic_vcf(
    n_variants: int,
    output_path: Path | None = None,
    samples: list[str] | None = None,
    seed: int | None = None,
) -> Path:
    """Generate a gzipped synthetic VCF with ``n_variants`` data lines.

    Variants are spread evenly over the human chromosomes with sorted random
    positions; about a fifth are indels and a few are multi-allelic.

    Args:
        n_variants: Number of variants to generate.
        output_path: Optional output path. If None, creates a temp file.
        samples: Sample column names (defaults to a single SAMPLE1).
        seed: Seed for reproducible output.

    Returns:
        Path to the generated VCF file.
    """
    rng = random.Random(seed)
    samples = samples or ["SAMPLE1"]

    if output_path is None:
        with tempfile.NamedTemporaryFile(suffix=".vcf.gz", delete=False) as f:
            output_path = Path(f.name)
    else:
        output_path = Path(output_path)

    variants_per_chrom = n_variants // len(CHROMOSOMES)
    remainder = n_variants % len(CHROMOSOMES)

    with gzip.open(output_path, "wt") as f:
        f.write(SYNTHETIC_HEADER)
        f.write(
            "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\t" + "\t".join(samples) + "\n"
        )

        for i, chrom in enumerate(CHROMOSOMES):
            count = variants_per_chrom + (1 if i < remainder else 0)
            positions = sorted(rng.sample(range(10_000, 100_000_000), count))

            for pos in positions:
                ref, alt = _random_alleles(rng)
                info = f"DP={rng.randint(10, 100)};AF={round(rng.uniform(0.01, 0.5), 4)}"
                if rng.random() < 0.3:
                    info += ";DB"
                sample_cols = "\t".join(
                    f"{rng.choice(['0/1', '1/1', '0/0', './.', '0|1'])}:{rng.randint(5, 50)}"
                    for _ in samples
                )
                f.write(
                    f"{chrom}\t{pos}\t.\t{ref}\t{alt}\t{rng.randint(20, 100)}\t"
                    f"{rng.choice(FILTERS)}\t{info}\tGT:DP\t{sample_cols}\n"
                )

    return output_path


def run_parsing_benchmark(
    vcf_path: Path, config: ParserConfig | None = None
) -> tuple[int, float]:
    """Run a parsing-only benchmark.

    Returns:
        Tuple of (variant_count, elapsed_time).
    """
    start = time.perf_counter()
    total = 0
    with VCFStreamingParser.from_path(vcf_path, config) as parser:
        for _record in parser:
            total += 1
    elapsed = time.perf_counter() - start

    return total, elapsed


def run_benchmark(
    vcf_path: Path | None = None,
    synthetic_count: int | None = None,
    config: ParserConfig | None = None,
    seed: int | None = None,
) -> BenchmarkResult:
    """Run a complete benchmark on a file or a freshly generated synthetic VCF.

    Raises:
        ValueError: If neither ``vcf_path`` nor ``synthetic_count`` is given.
    """
    config = config or ParserConfig()
    synthetic = False

    if synthetic_count is not None:
        vcf_path = generate_synthetic_vcf(synthetic_count, seed=seed)
        synthetic = True
    elif vcf_path is None:
        raise ValueError("Either vcf_path or synthetic_count must be provided")

    try:
        variant_count, parsing_time = run_parsing_benchmark(vcf_path, config)
    finally:
        if synthetic:
            vcf_path.unlink(missing_ok=True)

    return BenchmarkResult(
        vcf_path=str(vcf_path),
        variant_count=variant_count,
        parsing_time=parsing_time,
        parsing_rate=variant_count / parsing_time if parsing_time > 0 else 0.0,
        parse_info=config.parse_info,
        parse_samples=config.parse_samples,
        synthetic=synthetic,
    )
