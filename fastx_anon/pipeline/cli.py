"""
Typer CLI wrappers for fastx-anon.
"""
from __future__ import annotations
import json
import pathlib
import zlib
from functools import wraps
from typing import Optional

import typer

from ..errors import ConfigError, FastxAnonError
from ..convert import fasta_to_csv, fastq_to_csv, csv_to_fasta, csv_to_fastq
from .driver import resolve_options, run_hash_pipeline

IO_ERROR_EXIT = 2

# ──────────────────────────────────────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────────────────────────────────────
def _load_json(path: pathlib.Path) -> dict:
    """Load a JSON config object, with a clear error."""
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ConfigError(f"JSON parse error in {path} – {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: config must be a JSON object")
    return data


def _fail(msg: str, code: int):
    typer.secho(f"❌ {msg}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code)


def _guarded(func):
    """Map the error taxonomy onto one diagnostic line + exit code."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except FastxAnonError as e:
            _fail(f"{type(e).__name__}: {e}", e.exit_code)
        except (OSError, EOFError, zlib.error) as e:
            # gzip input truncated or corrupt partway through lands here too
            _fail(f"IOError: {e}", IO_ERROR_EXIT)
    return wrapper


# ──────────────────────────────────────────────────────────────────────────────
# Typer app
# ──────────────────────────────────────────────────────────────────────────────
app = typer.Typer(add_completion=False, help="Anonymize FASTA/FASTQ headers")

# ------------------------------------------------------------------ hash
@app.command("hash")
@_guarded
def hash_cmd(
    input: pathlib.Path = typer.Option(..., "--input", "-i", help="FASTA/FASTQ, optionally gzipped"),
    output: pathlib.Path = typer.Option(..., "--output", "-o"),
    mapping: Optional[pathlib.Path] = typer.Option(
        None, "--mapping", "--csv", "-c",
        help="Write original→hashed header mapping here (.json → JSON, else CSV).",
    ),
    mapping_format: Optional[str] = typer.Option(
        None, "--mapping-format", help="csv or json (default: from --mapping suffix)"
    ),
    gzip_output: Optional[bool] = typer.Option(
        None, "--gzip/--no-gzip", help="Gzip-compress the output"
    ),
    threads: Optional[int] = typer.Option(
        None, "--threads", "-t", min=1,
        help="Worker threads; >1 loads the whole file in memory (default 1)",
    ),
    batch_size: Optional[int] = typer.Option(
        None, "--batch-size", min=1, help="Records per worker batch (default 500)"
    ),
    strict_quality: Optional[bool] = typer.Option(
        None, "--strict-quality/--lenient-quality",
        help="Reject FASTQ records whose quality length differs from the sequence",
    ),
    config: Optional[pathlib.Path] = typer.Option(
        None, "--config", help="JSON file with default options"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="No progress messages"),
):
    """Replace every header with a 12-char SHA-256 digest."""
    cfg = _load_json(config) if config else {}
    opts = resolve_options(
        cfg,
        gzip_output=gzip_output,
        mapping_path=mapping,
        mapping_format=mapping_format,
        thread_count=threads,
        batch_size=batch_size,
        strict_quality=strict_quality,
    )
    run_hash_pipeline(input, output, verbose=not quiet, **opts)

# ------------------------------------------------------------------ converters
@app.command("fasta-to-csv")
@_guarded
def fasta_to_csv_cmd(
    input: pathlib.Path = typer.Option(..., "--input", "-i"),
    output: pathlib.Path = typer.Option(..., "--output", "-o"),
):
    """FASTA → CSV (header,sequence)."""
    n = fasta_to_csv(input, output)
    typer.echo(f"Done – {n} record(s) → {output}")


@app.command("fastq-to-csv")
@_guarded
def fastq_to_csv_cmd(
    input: pathlib.Path = typer.Option(..., "--input", "-i"),
    output: pathlib.Path = typer.Option(..., "--output", "-o"),
    quality: bool = typer.Option(False, "--quality", help="Also write the quality column"),
):
    """FASTQ → CSV (header,sequence[,quality])."""
    n = fastq_to_csv(input, output, write_quality=quality)
    typer.echo(f"Done – {n} record(s) → {output}")


@app.command("csv-to-fasta")
@_guarded
def csv_to_fasta_cmd(
    input: pathlib.Path = typer.Option(..., "--input", "-i"),
    header: str = typer.Option(..., "--header", "-q", help="Header column name"),
    sequence: str = typer.Option(..., "--sequence", "-s", help="Sequence column name"),
    output: pathlib.Path = typer.Option(..., "--output", "-o"),
    gzip_output: bool = typer.Option(False, "--gzip"),
):
    """CSV → FASTA."""
    n = csv_to_fasta(input, output, header, sequence, gzip_output=gzip_output)
    typer.echo(f"Done – {n} record(s) → {output}")


@app.command("csv-to-fastq")
@_guarded
def csv_to_fastq_cmd(
    input: pathlib.Path = typer.Option(..., "--input", "-i"),
    header: str = typer.Option(..., "--header", "-q", help="Header column name"),
    sequence: str = typer.Option(..., "--sequence", "-s", help="Sequence column name"),
    quality: str = typer.Option(..., "--quality", "-u", help="Quality column name"),
    output: pathlib.Path = typer.Option(..., "--output", "-o"),
    gzip_output: bool = typer.Option(False, "--gzip"),
):
    """CSV → FASTQ."""
    n = csv_to_fastq(input, output, header, sequence, quality, gzip_output=gzip_output)
    typer.echo(f"Done – {n} record(s) → {output}")


def main():
    app()


if __name__ == "__main__":
    main()
