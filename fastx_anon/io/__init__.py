"""
Low-level FASTA/FASTQ I/O helpers.
"""
from .compression import (
    Compression,
    detect_compression,
    open_input,
    open_output,
)
from .fastx import (
    FileFormat,
    Record,
    sniff_format,
    iter_fasta,
    iter_fastq,
    iter_records,
    parse_fastx,
)
from .writer import render_record, write_records

__all__ = [
    "Compression",
    "detect_compression",
    "open_input",
    "open_output",
    "FileFormat",
    "Record",
    "sniff_format",
    "iter_fasta",
    "iter_fastq",
    "iter_records",
    "parse_fastx",
    "render_record",
    "write_records",
]
