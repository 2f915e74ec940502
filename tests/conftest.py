"""Pytest configuration and fixtures for vcf-stream tests."""

import gzip
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))

from fixtures.vcf_generator import (  # noqa: E402
    SAMPLE_VCF,
    SyntheticVariant,
    VCFGenerator,
    make_trio_vcf,
    make_vcf_with_invalid_line,
)

__all__ = [
    "SAMPLE_VCF",
    "SyntheticVariant",
    "VCFGenerator",
    "make_trio_vcf",
    "make_vcf_with_invalid_line",
]


@pytest.fixture
def sample_vcf() -> str:
    """Three-record VCF with two samples."""
    return SAMPLE_VCF


@pytest.fixture
def sample_vcf_path(tmp_path: Path) -> Path:
    path = tmp_path / "sample.vcf"
    path.write_text(SAMPLE_VCF)
    return path


@pytest.fixture
def sample_vcf_gz_path(tmp_path: Path) -> Path:
    path = tmp_path / "sample.vcf.gz"
    with gzip.open(path, "wt") as f:
        f.write(SAMPLE_VCF)
    return path


@pytest.fixture
def trio_vcf() -> str:
    return make_trio_vcf()


@pytest.fixture
def invalid_line_vcf() -> tuple[str, int]:
    """Three good records plus one short line; returns (content, bad line number)."""
    return make_vcf_with_invalid_line(3)
