"""Genotype (GT) token decoding."""

import re
from dataclasses import dataclass

MISSING_GENOTYPES = frozenset({".", "./.", ".|."})
PHASED_SEPARATOR = "|"
UNPHASED_SEPARATOR = "/"

_ALLELE_PATTERN = re.compile(r"[0-9]{1,18}")


def _parse_allele(allele_str: str) -> int | None:
    """Parse allele string to integer, returning None for missing."""
    if not _ALLELE_PATTERN.fullmatch(allele_str):
        return None
    return int(allele_str)


@dataclass(frozen=True)
class Genotype:
    """Allele indices for one sample at one site.

    Index 0 is the reference allele, 1.. index into the ALT list, and None is
    a missing allele.
    """

    alleles: tuple[int | None, ...]
    phased: bool = False

    @classmethod
    def parse(cls, token: str) -> "Genotype | None":
        """Decode a GT token such as "0/1", "1|1" or "./1".

        Fully missing tokens (".", "./.", ".|.") decode to None rather than a
        Genotype with no called alleles.
        """
        if token in MISSING_GENOTYPES:
            return None

        phased = PHASED_SEPARATOR in token
        separator = PHASED_SEPARATOR if phased else UNPHASED_SEPARATOR
        alleles = tuple(_parse_allele(part) for part in token.split(separator))
        return cls(alleles=alleles, phased=phased)

    @property
    def ploidy(self) -> int:
        return len(self.alleles)

    @property
    def called_alleles(self) -> list[int]:
        """Non-missing allele indices, in order."""
        return [a for a in self.alleles if a is not None]

    def is_hom_ref(self) -> bool:
        called = self.called_alleles
        return bool(called) and all(a == 0 for a in called)

    def is_het(self) -> bool:
        called = self.called_alleles
        return len(called) >= 2 and any(a != called[0] for a in called)

    def is_hom_alt(self) -> bool:
        called = self.called_alleles
        return bool(called) and all(a > 0 and a == called[0] for a in called)

    def __str__(self) -> str:
        separator = PHASED_SEPARATOR if self.phased else UNPHASED_SEPARATOR
        return separator.join("." if a is None else str(a) for a in self.alleles)
