"""vcf-stream: streaming VCF parser CLI."""

import logging
from itertools import islice
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import ConfigValidationError, load_config, load_settings
from .errors import VCFError
from .serialization import header_to_dict, to_json
from .stats import compute_stats, compute_stats_parallel
from .vcf_parser import ParserConfig, VCFParser, VCFStreamingParser


def version_callback(value: bool) -> None:
    if value:
        print(__version__)
        raise typer.Exit()


app = typer.Typer(name="vcf-stream", help="Parse VCF files and summarise their variants")
console = Console()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version and exit"
        ),
    ] = None,
) -> None:
    pass


def setup_logging(verbose: bool, quiet: bool, log_file: Path | None = None) -> None:
    """Configure logging based on verbosity flags."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("vcf_stream").setLevel(level)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        logging.getLogger("vcf_stream").addHandler(file_handler)


def _build_config(
    config_file: Path | None,
    skip_invalid: bool | None,
    parse_info: bool | None,
    parse_samples: bool | None,
) -> ParserConfig:
    """Start from the config file (or defaults) and apply explicit CLI flags."""
    overrides = {
        key: value
        for key, value in (
            ("skip_invalid", skip_invalid),
            ("parse_info", parse_info),
            ("parse_samples", parse_samples),
        )
        if value is not None
    }
    if config_file:
        return load_config(config_file, overrides=overrides)
    return ParserConfig(**overrides)


def _check_input(vcf_path: Path) -> None:
    if not vcf_path.exists():
        console.print(f"[red]Error: VCF file not found: {vcf_path}[/red]")
        raise typer.Exit(1)


def _stats_table(stats) -> Table:
    table = Table(title="Variant Statistics")
    table.add_column("Metric")
    table.add_column("Count", justify="right")
    table.add_row("Total records", f"{stats.total_records:,}")
    table.add_row("SNPs", f"{stats.snps:,}")
    table.add_row("Insertions", f"{stats.insertions:,}")
    table.add_row("Deletions", f"{stats.deletions:,}")
    table.add_row("Complex", f"{stats.complex:,}")
    table.add_row("Passed filter", f"{stats.passed_filter:,}")
    table.add_row("Failed filter", f"{stats.failed_filter:,}")
    table.add_row("Chromosomes", ", ".join(stats.chromosomes) or "-")
    return table


@app.command()
def parse(
    vcf_path: Path = typer.Argument(..., help="Path to VCF file (.vcf, .vcf.gz)"),
    skip_invalid: Annotated[
        bool | None,
        typer.Option(
            "--skip-invalid/--strict", help="Skip recoverable bad records instead of failing"
        ),
    ] = None,
    parse_info: Annotated[
        bool | None, typer.Option("--info/--no-info", help="Infer INFO value types")
    ] = None,
    parse_samples: Annotated[
        bool | None, typer.Option("--samples/--no-samples", help="Decode sample columns")
    ] = None,
    config_file: Annotated[
        Path | None, typer.Option("--config", "-c", help="TOML configuration file")
    ] = None,
    json_output: bool = typer.Option(False, "--json", help="Write records as JSON lines"),
    limit: Annotated[
        int | None, typer.Option("--limit", "-n", min=0, help="Stop after N records")
    ] = None,
    log_file: Annotated[Path | None, typer.Option("--log", help="Write log to file")] = None,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
) -> None:
    """Parse a VCF file and report records, warnings and statistics."""
    setup_logging(verbose, quiet, log_file)
    _check_input(vcf_path)

    try:
        config = _build_config(config_file, skip_invalid, parse_info, parse_samples)
        if config_file and not (verbose or quiet):
            log_level = load_settings(config_file).get("log_level")
            if log_level:
                logging.getLogger("vcf_stream").setLevel(log_level)
        with VCFStreamingParser.from_path(vcf_path, config) as stream:
            records = []
            for record in islice(stream, limit):
                if json_output:
                    typer.echo(to_json(record))
                records.append(record)
            warnings = stream.warnings
    except (ConfigValidationError, FileNotFoundError) as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1) from None
    except VCFError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    if json_output or quiet:
        return

    console.print(f"[green]✓[/green] Parsed {len(records):,} records from {vcf_path.name}")
    if warnings:
        console.print(f"[yellow]{len(warnings)} record(s) skipped:[/yellow]")
        for warning in warnings:
            console.print(f"  line {warning.line}: {warning.message}")
    console.print(_stats_table(compute_stats(records)))


@app.command()
def stats(
    vcf_path: Path = typer.Argument(..., help="Path to VCF file (.vcf, .vcf.gz)"),
    parallel: bool = typer.Option(False, "--parallel", "-p", help="Fold records on worker threads"),
    workers: Annotated[
        int | None, typer.Option("--workers", "-w", help="Worker threads for --parallel")
    ] = None,
    skip_invalid: bool = typer.Option(
        True, "--skip-invalid/--strict", help="Skip recoverable bad records"
    ),
    config_file: Annotated[
        Path | None, typer.Option("--config", "-c", help="TOML configuration file")
    ] = None,
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Compute variant statistics for a VCF file."""
    setup_logging(verbose, quiet=not verbose)
    _check_input(vcf_path)

    try:
        if config_file and workers is None:
            workers = load_settings(config_file).get("workers")
        config = ParserConfig(
            parse_info=False, parse_samples=False, skip_invalid=skip_invalid
        )
        _header, records = VCFParser(config).parse_file(vcf_path)
        if parallel:
            result = compute_stats_parallel(records, workers=workers)
        else:
            result = compute_stats(records)
    except (ConfigValidationError, FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None
    except VCFError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    if json_output:
        typer.echo(to_json(result, indent=2))
    else:
        console.print(_stats_table(result))


@app.command()
def header(
    vcf_path: Path = typer.Argument(..., help="Path to VCF file (.vcf, .vcf.gz)"),
    json_output: bool = typer.Option(False, "--json", help="Output header as JSON"),
) -> None:
    """Show the header of a VCF file without reading its records."""
    _check_input(vcf_path)

    try:
        with VCFStreamingParser.from_path(vcf_path) as stream:
            vcf_header = stream.header
    except VCFError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    if json_output:
        typer.echo(to_json(vcf_header, indent=2))
        return

    summary = header_to_dict(vcf_header)
    console.print(f"[bold]File format:[/bold] {summary['file_format']}")
    console.print(f"[bold]Reference:[/bold] {summary['reference'] or '-'}")
    console.print(f"[bold]Contigs:[/bold] {len(summary['contigs'])}")
    console.print(f"[bold]INFO fields:[/bold] {len(summary['info_fields'])}")
    console.print(f"[bold]FORMAT fields:[/bold] {len(summary['format_fields'])}")
    console.print(f"[bold]Filters:[/bold] {len(summary['filters'])}")
    console.print(
        f"[bold]Samples ({len(summary['samples'])}):[/bold] {', '.join(summary['samples']) or '-'}"
    )


@app.command()
def benchmark(
    vcf_path: Annotated[Path | None, typer.Option("--vcf", "-f", help="Path to VCF file")] = None,
    synthetic: Annotated[
        int | None, typer.Option("--synthetic", "-s", help="Generate synthetic VCF with N variants")
    ] = None,
    fast: bool = typer.Option(False, "--fast", help="Skip INFO and sample decoding"),
    seed: Annotated[int | None, typer.Option("--seed", help="Seed for synthetic data")] = None,
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Minimal output"),
) -> None:
    """Run parsing throughput benchmarks.

    Examples:

        # Generate and benchmark 100K synthetic variants
        vcf-stream benchmark --synthetic 100000

        # Benchmark a specific VCF file without INFO/sample decoding
        vcf-stream benchmark --vcf sample.vcf.gz --fast
    """
    import json

    from .benchmark import run_benchmark

    if vcf_path and not vcf_path.exists():
        console.print(f"[red]Error: VCF file not found: {vcf_path}[/red]")
        raise typer.Exit(1)

    config = ParserConfig.fast() if fast else ParserConfig(skip_invalid=True)

    try:
        result = run_benchmark(
            vcf_path=vcf_path, synthetic_count=synthetic, config=config, seed=seed
        )
    except (ValueError, VCFError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    if not quiet:
        source = "synthetic" if result.synthetic else Path(result.vcf_path).name
        console.print(f"\n[bold]Benchmark Results[/bold] ({source})")
        console.print(f"  Variants: {result.variant_count:,}")
        console.print(f"  INFO parsing: {result.parse_info}")
        console.print(f"  Sample parsing: {result.parse_samples}")
        console.print()

    console.print(
        f"[cyan]Parsing:[/cyan] {result.variant_count:,} variants in "
        f"{result.parsing_time:.2f}s ([green]{result.parsing_rate:,.0f}/sec[/green])"
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
