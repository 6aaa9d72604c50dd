from __future__ import annotations
import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional

from ..errors import MalformedRecordError, UnknownFormatError
from .compression import Compression, open_input


class FileFormat(str, Enum):
    FASTA = "fasta"
    FASTQ = "fastq"


MARKERS = {FileFormat.FASTA: ">", FileFormat.FASTQ: "@"}


@dataclass(frozen=True)
class Record:
    header: str                     # without the '>' / '@' marker
    sequence: str
    quality: Optional[str] = None   # FASTQ only


# --------------------------------------------------------------------------
def sniff_format(path, compression: Compression | None = None) -> FileFormat:
    """
    Classify `path` from its first decoded character.
    Uses its own handle; callers re-open the file for the real parse.
    """
    with open_input(path, compression) as fh:
        first = fh.read(1)
    for fmt, marker in MARKERS.items():
        if first == marker:
            return fmt
    raise UnknownFormatError(
        f"{path}: expected '>' (FASTA) or '@' (FASTQ) as first character, got {first!r}"
    )


# --------------------------------------------------------------------------
def iter_fasta(lines: Iterable[str]) -> Iterator[Record]:
    """
    Lazy FASTA reader. Sequence lines are concatenated without separator.
    Records whose header is empty after stripping '>' are dropped.
    """
    header, chunks = "", []
    for line in lines:
        line = line.rstrip("\r\n")
        if line.startswith(">"):
            if header:
                yield Record(header, "".join(chunks))
            header, chunks = line[1:], []
        else:
            chunks.append(line)
    if header:
        yield Record(header, "".join(chunks))


def iter_fastq(lines: Iterable[str], strict_quality: bool = False) -> Iterator[Record]:
    """
    Strict FASTQ reader: one record per non-overlapping 4-line quartet.

    Raises MalformedRecordError on a bad '@'/'+' marker, an empty header,
    or a truncated trailing quartet. Blank lines at end of input are ignored.
    With `strict_quality`, quality and sequence lengths must match.
    """
    it = iter(lines)
    lineno = 1
    while True:
        quartet = [ln.rstrip("\r\n") for ln in itertools.islice(it, 4)]
        if not quartet:
            return
        if not any(quartet):
            if any(ln.strip() for ln in it):
                raise MalformedRecordError("blank lines inside FASTQ input", line=lineno)
            return
        if len(quartet) < 4:
            raise MalformedRecordError(
                f"truncated record: expected 4 lines, found {len(quartet)}", line=lineno
            )
        header, sequence, separator, quality = quartet
        if not header.startswith("@"):
            raise MalformedRecordError(f"header must start with '@': {header[:40]!r}", line=lineno)
        if not separator.startswith("+"):
            raise MalformedRecordError(
                f"separator must start with '+': {separator[:40]!r}", line=lineno + 2
            )
        if len(header) == 1:
            raise MalformedRecordError("empty header", line=lineno)
        if strict_quality and len(quality) != len(sequence):
            raise MalformedRecordError(
                f"quality length {len(quality)} != sequence length {len(sequence)}",
                line=lineno + 3,
            )
        yield Record(header[1:], sequence, quality)
        lineno += 4


def iter_records(lines: Iterable[str],
                 file_format: FileFormat,
                 strict_quality: bool = False) -> Iterator[Record]:
    if file_format is FileFormat.FASTQ:
        return iter_fastq(lines, strict_quality=strict_quality)
    return iter_fasta(lines)


def parse_fastx(path,
                file_format: FileFormat | None = None,
                strict_quality: bool = False) -> Iterator[Record]:
    """Open `path` (gzip-aware), sniff its format if not given, and yield records."""
    if file_format is None:
        file_format = sniff_format(path)
    with open_input(path) as fh:
        yield from iter_records(fh, file_format, strict_quality=strict_quality)
