"""
Column-copy converters between CSV tables and FASTA/FASTQ files.
"""
from __future__ import annotations
import itertools
from typing import Iterator, List

import pandas as pd

from ..errors import MissingFieldError
from ..io.compression import ENCODING, ENCODING_ERRORS, open_input, open_output
from ..io.fastx import FileFormat, Record, iter_fasta, iter_fastq
from ..io.writer import write_records

CHUNK_ROWS = 10_000


# --------------------------------------------------------------------------
def _records_to_csv(records: Iterator[Record], output, columns: List[str]) -> int:
    """Append records to `output` in `CHUNK_ROWS` batches; header row written once."""
    batches = iter(lambda: list(itertools.islice(records, CHUNK_ROWS)), [])
    n = 0
    first = True
    for batch in batches:
        df = pd.DataFrame([[getattr(r, f) for f in columns] for r in batch], columns=columns)
        df.to_csv(output, mode="w" if first else "a", header=first, index=False,
                  encoding=ENCODING, errors=ENCODING_ERRORS)
        first = False
        n += len(batch)
    if first:
        pd.DataFrame(columns=columns).to_csv(output, index=False, encoding=ENCODING)
    return n


def fasta_to_csv(input_path, output_path) -> int:
    """FASTA (optionally gzipped) -> CSV with columns header,sequence."""
    with open_input(input_path) as fh:
        return _records_to_csv(iter_fasta(fh), output_path, ["header", "sequence"])


def fastq_to_csv(input_path, output_path, write_quality: bool = False) -> int:
    """FASTQ -> CSV with columns header,sequence[,quality]."""
    columns = ["header", "sequence"] + (["quality"] if write_quality else [])
    with open_input(input_path) as fh:
        return _records_to_csv(iter_fastq(fh), output_path, columns)


# --------------------------------------------------------------------------
def _check_columns(input_path, wanted: List[str]) -> None:
    with open_input(input_path) as fh:
        try:
            present = list(pd.read_csv(fh, nrows=0).columns)
        except pd.errors.EmptyDataError:
            present = []
    for col in wanted:
        if col not in present:
            raise MissingFieldError(col, present)


def _iter_csv_records(input_path, wanted: List[str]) -> Iterator[Record]:
    with open_input(input_path) as fh:
        chunks = pd.read_csv(fh, dtype=str, keep_default_na=False, chunksize=CHUNK_ROWS)
        for chunk in chunks:
            for row in chunk[wanted].itertuples(index=False, name=None):
                yield Record(row[0], row[1], row[2] if len(row) > 2 else None)


def _write_fastx(records: Iterator[Record], output_path, file_format: FileFormat,
                 gzip_output: bool) -> int:
    with open_output(output_path, gzip_output) as sink:
        return write_records(sink, records, file_format)


def csv_to_fasta(input_path, output_path, header_col: str, sequence_col: str,
                 gzip_output: bool = False) -> int:
    wanted = [header_col, sequence_col]
    _check_columns(input_path, wanted)
    records = _iter_csv_records(input_path, wanted)
    return _write_fastx(records, output_path, FileFormat.FASTA, gzip_output)


def csv_to_fastq(input_path, output_path, header_col: str, sequence_col: str,
                 quality_col: str, gzip_output: bool = False) -> int:
    wanted = [header_col, sequence_col, quality_col]
    _check_columns(input_path, wanted)
    records = _iter_csv_records(input_path, wanted)
    return _write_fastx(records, output_path, FileFormat.FASTQ, gzip_output)
