"""
Top-level namespace
"""
from importlib.metadata import version as _ver, PackageNotFoundError

try:
    __version__ = _ver("fastx-anon")
except PackageNotFoundError:
    __version__ = "0+local"

# ----- high-level API ------------------------------------------------
from .pipeline.driver import run_hash_pipeline
from .core.anonymize import digest_header
from .core.parallel import ParallelHasher
from .io.fastx import FileFormat, Record, sniff_format, parse_fastx
from .utils.mapping import write_header_mapping, read_header_mapping
from .errors import (
    FastxAnonError,
    UnknownFormatError,
    MalformedRecordError,
    MissingFieldError,
    ConfigError,
)

__all__ = [
    "run_hash_pipeline",
    "digest_header",
    "ParallelHasher",
    "FileFormat",
    "Record",
    "sniff_format",
    "parse_fastx",
    "write_header_mapping",
    "read_header_mapping",
    "FastxAnonError",
    "UnknownFormatError",
    "MalformedRecordError",
    "MissingFieldError",
    "ConfigError",
]
