from __future__ import annotations
from typing import Iterable, TextIO

from .fastx import FileFormat, Record


def render_record(record: Record, file_format: FileFormat) -> str:
    """Rebuild the textual framing of one record."""
    if file_format is FileFormat.FASTQ:
        return f"@{record.header}\n{record.sequence}\n+\n{record.quality or ''}\n"
    return f">{record.header}\n{record.sequence}\n"


def write_records(sink: TextIO, records: Iterable[Record], file_format: FileFormat) -> int:
    n = 0
    for rec in records:
        sink.write(render_record(rec, file_format))
        n += 1
    return n
