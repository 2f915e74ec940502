"""VCF parsing entry points: batch parsing, streaming and fault handling."""

import gzip
import io
import logging
import os
import time
import zlib
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Union

from .errors import EncodingError, ParseWarning, VCFError, VCFIOError, WarningCategory
from .header import VCFHeaderParser
from .models import VariantRecord, VCFHeader
from .record import VariantParser
from .stats import VcfStats, compute_stats

logger = logging.getLogger(__name__)

VCFSource = Union[str, bytes, bytearray, os.PathLike, IO[str], IO[bytes], Iterable[str], Iterable[bytes]]


@dataclass
class ParserConfig:
    """Configuration for VCF parsing."""

    parse_info: bool = True
    parse_samples: bool = True
    skip_invalid: bool = False
    collect_warnings: bool = True

    @classmethod
    def fast(cls) -> "ParserConfig":
        """Skip INFO and sample decoding and drop bad records silently."""
        return cls(parse_info=False, parse_samples=False, skip_invalid=True, collect_warnings=False)


class FaultPolicy:
    """Decides whether a record-level error aborts the parse or becomes a warning.

    Only recoverable errors can be skipped, and only with ``skip_invalid``.
    """

    def __init__(self, skip_invalid: bool = False, collect_warnings: bool = True):
        self.skip_invalid = skip_invalid
        self.collect_warnings = collect_warnings
        self.warnings: list[ParseWarning] = []
        self.skipped = 0

    def reset(self) -> None:
        self.warnings.clear()
        self.skipped = 0

    def handle(self, error: VCFError, line_number: int) -> None:
        """Raise ``error`` unless it can be skipped; otherwise record it."""
        if not (self.skip_invalid and error.is_recoverable()):
            raise error

        self.skipped += 1
        logger.warning("Skipping invalid record at line %d: %s", line_number, error)
        if self.collect_warnings:
            self.warnings.append(ParseWarning(line_number, str(error), WarningCategory.OTHER))


def open_vcf(path: str | os.PathLike) -> IO[bytes]:
    """Open a .vcf or .vcf.gz file for binary reading."""
    path = Path(path)
    try:
        if path.suffix == ".gz":
            return gzip.open(path, "rb")
        return open(path, "rb")
    except OSError as e:
        raise VCFIOError(f"{path}: {e.strerror or e}") from e


def read_lines(source: Iterable[str] | Iterable[bytes]) -> Iterator[str]:
    """Yield lines without terminators, decoding bytes as UTF-8.

    Read failures surface as VCFIOError and decode failures as EncodingError.
    """
    iterator = iter(source)
    while True:
        try:
            raw = next(iterator)
        except StopIteration:
            return
        except UnicodeDecodeError as e:
            raise EncodingError(str(e)) from e
        except (OSError, EOFError, zlib.error) as e:
            raise VCFIOError(str(e)) from e

        if isinstance(raw, (bytes, bytearray)):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise EncodingError(str(e)) from e

        yield raw.rstrip("\r\n")


def _open_source(source: VCFSource) -> tuple[Iterable, IO | None]:
    """Resolve a source to an iterable of lines and, if opened here, its handle.

    ``str`` is VCF text; paths must be given as ``pathlib.Path`` (or any
    ``os.PathLike``).
    """
    if isinstance(source, str):
        return io.StringIO(source), None
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(bytes(source)), None
    if isinstance(source, os.PathLike):
        handle = open_vcf(source)
        return handle, handle
    return source, None


class VCFParser:
    """Batch VCF parser.

    Each call to ``parse`` resets the line counter and the warning buffer.
    """

    def __init__(self, config: ParserConfig | None = None):
        self.config = config or ParserConfig()
        self._policy = FaultPolicy(self.config.skip_invalid, self.config.collect_warnings)
        self._variant_parser = VariantParser(self.config.parse_info, self.config.parse_samples)
        self.line_number = 0

    @property
    def warnings(self) -> list[ParseWarning]:
        return list(self._policy.warnings)

    @property
    def skipped(self) -> int:
        return self._policy.skipped

    def clear_warnings(self) -> None:
        self._policy.warnings.clear()

    def parse(self, source: VCFSource) -> tuple[VCFHeader, list[VariantRecord]]:
        """Parse a whole VCF into its header and records.

        Raises:
            MissingHeaderError, InvalidHeaderError: Header problems (always fatal).
            VCFIOError, EncodingError: Read or decode failures (always fatal).
            InvalidRecordError, InvalidPositionError, MissingFieldError:
                A bad data line, unless ``skip_invalid`` is set.
        """
        self.line_number = 0
        self._policy.reset()

        lines_source, handle = _open_source(source)
        try:
            lines = read_lines(lines_source)
            header_parser = VCFHeaderParser()
            header = header_parser.parse(lines)
            self.line_number = header_parser.line_number

            records = []
            for line in lines:
                self.line_number += 1
                if not line:
                    continue
                try:
                    records.append(
                        self._variant_parser.parse_variant(line, self.line_number, header)
                    )
                except VCFError as e:
                    self._policy.handle(e, self.line_number)
        finally:
            if handle is not None:
                handle.close()

        logger.debug(
            "Parsed %d records (%d skipped) from %d lines",
            len(records),
            self._policy.skipped,
            self.line_number,
        )
        return header, records

    def parse_string(self, content: str) -> tuple[VCFHeader, list[VariantRecord]]:
        return self.parse(content)

    def parse_bytes(self, data: bytes) -> tuple[VCFHeader, list[VariantRecord]]:
        return self.parse(bytes(data))

    def parse_file(self, path: str | os.PathLike) -> tuple[VCFHeader, list[VariantRecord]]:
        return self.parse(Path(path))


class VCFStreamingParser:
    """Lazy, forward-only record iterator.

    The header is parsed eagerly in the constructor, so header errors are
    raised there. Iteration yields one record per non-blank line. With
    ``skip_invalid`` bad lines are skipped and recorded in ``warnings``;
    otherwise the error is raised from ``next()`` for that line. Read and
    decode failures are raised from ``next()`` and end the iteration.
    """

    def __init__(self, source: VCFSource, config: ParserConfig | None = None):
        self.config = config or ParserConfig()
        self._policy = FaultPolicy(self.config.skip_invalid, self.config.collect_warnings)
        self._variant_parser = VariantParser(self.config.parse_info, self.config.parse_samples)

        lines_source, self._handle = _open_source(source)
        self._lines = read_lines(lines_source)
        header_parser = VCFHeaderParser()
        try:
            self.header = header_parser.parse(self._lines)
        except VCFError:
            self.close()
            raise
        self.line_number = header_parser.line_number

    @classmethod
    def from_path(
        cls, path: str | os.PathLike, config: ParserConfig | None = None
    ) -> "VCFStreamingParser":
        return cls(Path(path), config)

    @property
    def samples(self) -> tuple[str, ...]:
        return self.header.samples

    @property
    def warnings(self) -> list[ParseWarning]:
        return list(self._policy.warnings)

    def __iter__(self) -> "VCFStreamingParser":
        return self

    def __next__(self) -> VariantRecord:
        for line in self._lines:
            self.line_number += 1
            if not line:
                continue
            try:
                return self._variant_parser.parse_variant(line, self.line_number, self.header)
            except VCFError as e:
                self._policy.handle(e, self.line_number)
        self.close()
        raise StopIteration

    def iter_batches(self, batch_size: int = 10_000) -> Iterator[list[VariantRecord]]:
        """Yield records in lists of at most ``batch_size``."""
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        batch: list[VariantRecord] = []
        for record in self:
            batch.append(record)
            if len(batch) >= batch_size:
                yield batch
                batch = []
        if batch:
            yield batch

    def close(self) -> None:
        """Release the underlying file. Safe to call more than once."""
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> "VCFStreamingParser":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


@dataclass
class ParseResult:
    """Header, records and summary of one batch parse."""

    header: VCFHeader
    records: list[VariantRecord]
    stats: VcfStats
    warnings: list[ParseWarning] = field(default_factory=list)
    parse_time_ms: float = 0.0


def parse(
    source: VCFSource, config: ParserConfig | None = None
) -> tuple[VCFHeader, list[VariantRecord]]:
    """Parse a whole VCF in one call."""
    return VCFParser(config).parse(source)


def parse_streaming(
    source: VCFSource, config: ParserConfig | None = None
) -> tuple[VCFHeader, VCFStreamingParser]:
    """Parse the header now and return it with a lazy record iterator."""
    stream = VCFStreamingParser(source, config)
    return stream.header, stream


def parse_with_stats(source: VCFSource, config: ParserConfig | None = None) -> ParseResult:
    """Parse a VCF and compute its statistics, timing the whole call."""
    start = time.perf_counter()
    parser = VCFParser(config)
    header, records = parser.parse(source)
    stats = compute_stats(records)
    elapsed_ms = (time.perf_counter() - start) * 1000.0
    return ParseResult(
        header=header,
        records=records,
        stats=stats,
        warnings=parser.warnings,
        parse_time_ms=elapsed_ms,
    )


def get_stats(path: str | os.PathLike) -> VcfStats:
    """Stats-only pass over a file, skipping INFO and sample decoding."""
    with VCFStreamingParser.from_path(path, ParserConfig.fast()) as stream:
        return compute_stats(stream)
