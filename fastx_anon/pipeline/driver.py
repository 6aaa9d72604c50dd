"""
High-level drivers used by the CLI & notebooks.
"""
from __future__ import annotations
from pathlib import Path
from typing import Optional

from ..errors import ConfigError
from ..io import detect_compression, sniff_format, open_input, open_output, iter_records
from ..core import stream_anonymize, ParallelHasher
from ..utils.mapping import MAPPING_FORMATS, write_header_mapping

DEFAULT_OPTIONS = {
    "gzip_output": False,
    "mapping_path": None,
    "mapping_format": None,
    "thread_count": 1,
    "batch_size": 500,
    "strict_quality": False,
}

# ──────────────────────────────────────────────────────────────────────────────
# Option resolution
# ──────────────────────────────────────────────────────────────────────────────
def resolve_options(cfg: Optional[dict] = None, **overrides) -> dict:
    """
    DEFAULT_OPTIONS <- config dict <- explicit overrides (None = not given).
    Unknown keys and bad values raise ConfigError.
    """
    cfg = dict(cfg or {})
    unknown = sorted(set(cfg) - set(DEFAULT_OPTIONS))
    if unknown:
        raise ConfigError(f"unknown config key(s): {', '.join(unknown)}")

    opts = {**DEFAULT_OPTIONS, **cfg}
    opts.update({k: v for k, v in overrides.items() if v is not None})

    for key in ("thread_count", "batch_size"):
        val = opts[key]
        if isinstance(val, bool) or not isinstance(val, int) or val < 1:
            raise ConfigError(f"{key} must be a positive integer, got {val!r}")
    for key in ("gzip_output", "strict_quality"):
        if not isinstance(opts[key], bool):
            raise ConfigError(f"{key} must be true/false, got {opts[key]!r}")
    fmt = opts["mapping_format"]
    if fmt is not None and str(fmt).lower() not in MAPPING_FORMATS:
        raise ConfigError(f"mapping_format must be one of {MAPPING_FORMATS}, got {fmt!r}")
    return opts


# ──────────────────────────────────────────────────────────────────────────────
# Hash run
# ──────────────────────────────────────────────────────────────────────────────
def run_hash_pipeline(
    input_path,
    output_path,
    *,
    gzip_output: bool = False,
    mapping_path=None,
    mapping_format: Optional[str] = None,
    thread_count: int = 1,
    batch_size: int = 500,
    strict_quality: bool = False,
    verbose: bool = True,
) -> dict:
    """
    Replace every header of a FASTA/FASTQ file with its 12-char digest.

    thread_count == 1 streams record by record; thread_count > 1 loads the
    whole file and hashes it on a joblib pool of that size. Format errors
    are raised before the output file is created.
    """
    opts = resolve_options(
        gzip_output=gzip_output, mapping_path=mapping_path, mapping_format=mapping_format,
        thread_count=thread_count, batch_size=batch_size, strict_quality=strict_quality,
    )
    compression = detect_compression(input_path)
    file_format = sniff_format(input_path, compression)
    parallel = opts["thread_count"] > 1
    mapping = {} if opts["mapping_path"] else None

    if verbose:
        mode = f"parallel ×{opts['thread_count']}" if parallel else "streaming"
        print(f"🔐 Hashing {input_path} [{file_format.value}, {compression.value}, {mode}]")

    if parallel:
        hasher = ParallelHasher(
            input_path, file_format,
            n_jobs=opts["thread_count"],
            batch_size=opts["batch_size"],
            strict_quality=opts["strict_quality"],
            collect_mapping=mapping is not None,
        )
        hasher.load()
        hasher.hash()
        with open_output(output_path, opts["gzip_output"]) as sink:
            n_records = hasher.write(sink)
        mapping = hasher.finish()
    else:
        with open_input(input_path, compression) as handle, \
                open_output(output_path, opts["gzip_output"]) as sink:
            records = iter_records(handle, file_format, strict_quality=opts["strict_quality"])
            n_records = stream_anonymize(records, sink, file_format, mapping)

    if verbose:
        print(f"💾 {n_records} record(s) written → {output_path}")

    if mapping is not None:
        n_entries = write_header_mapping(mapping, opts["mapping_path"], opts["mapping_format"])
        if verbose:
            print(f"💾 Header mapping ({n_entries} entries) written → {opts['mapping_path']}")
            if n_entries < n_records:
                print(f"⚠️  {n_records - n_entries} duplicate header(s) collapsed in mapping")

    if verbose:
        print(f"✅ Finished {Path(input_path).name}")

    return {
        "input": str(input_path),
        "output": str(output_path),
        "format": file_format.value,
        "compression": compression.value,
        "mode": "parallel" if parallel else "streaming",
        "records": n_records,
        "mapping_entries": None if mapping is None else len(mapping),
    }
