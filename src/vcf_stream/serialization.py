"""JSON serialization of parsed headers, records and statistics."""

import json
from dataclasses import asdict
from typing import Any

from .errors import SerializationError
from .models import SampleData, VariantRecord, VCFHeader
from .stats import VcfStats


def header_to_dict(header: VCFHeader) -> dict[str, Any]:
    return {
        "file_format": header.file_format,
        "reference": header.reference,
        "contigs": [asdict(c) for c in header.contigs],
        "info_fields": [asdict(d) for d in header.info_fields],
        "format_fields": [asdict(d) for d in header.format_fields],
        "filters": [asdict(d) for d in header.filters],
        "samples": list(header.samples),
        "meta_lines": list(header.meta_lines),
    }


def sample_to_dict(sample: SampleData) -> dict[str, Any]:
    genotype = sample.genotype
    return {
        "name": sample.name,
        "genotype": (
            None
            if genotype is None
            else {"alleles": list(genotype.alleles), "phased": genotype.phased}
        ),
        "fields": dict(sample.fields),
    }


def record_to_dict(record: VariantRecord) -> dict[str, Any]:
    """Flatten a record; INFO values become plain Python values."""
    return {
        "chrom": record.chrom,
        "pos": record.pos,
        "id": record.id,
        "ref": record.ref,
        "alts": list(record.alts),
        "qual": record.qual,
        "filter": record.filter_string,
        "variant_type": record.variant_type.value,
        "info": {key: value.to_python() for key, value in record.info.items()},
        "samples": [sample_to_dict(s) for s in record.samples],
    }


def stats_to_dict(stats: VcfStats) -> dict[str, Any]:
    return stats.to_dict()


def _to_serializable(obj: Any) -> Any:
    if isinstance(obj, VCFHeader):
        return header_to_dict(obj)
    if isinstance(obj, VariantRecord):
        return record_to_dict(obj)
    if isinstance(obj, VcfStats):
        return stats_to_dict(obj)
    if isinstance(obj, SampleData):
        return sample_to_dict(obj)
    return obj


def to_json(obj: Any, indent: int | None = None) -> str:
    """Serialize a header, record, stats object (or a list of them) to JSON.

    Raises:
        SerializationError: If the value contains something JSON cannot
            represent, including NaN or infinite floats.
    """
    if isinstance(obj, (list, tuple)):
        payload = [_to_serializable(item) for item in obj]
    else:
        payload = _to_serializable(obj)

    try:
        return json.dumps(payload, indent=indent, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(str(e)) from e
