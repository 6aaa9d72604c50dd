import hashlib
from dataclasses import replace
from typing import Dict, Iterable, Optional, TextIO, Tuple

from ..io.compression import ENCODING, ENCODING_ERRORS
from ..io.fastx import FileFormat, Record
from ..io.writer import render_record

DIGEST_LENGTH = 12


# --------------------------------------------------------------------------
def digest_header(header: str) -> str:
    """
    First 12 hex chars (48 bits) of SHA-256 over the header bytes.
    No salt, no dependence on record order. Not collision-proof for very
    large header sets.
    """
    raw = header.encode(ENCODING, ENCODING_ERRORS)
    return hashlib.sha256(raw).hexdigest()[:DIGEST_LENGTH]


def anonymize_record(record: Record) -> Tuple[str, Record]:
    """Return (digest, copy of `record` with the digest as header)."""
    digest = digest_header(record.header)
    return digest, replace(record, header=digest)


# --------------------------------------------------------------------------
def stream_anonymize(records: Iterable[Record],
                     sink: TextIO,
                     file_format: FileFormat,
                     mapping: Optional[Dict[str, str]] = None) -> int:
    """
    Single-threaded path: hash and write one record at a time.
    If `mapping` is given it is filled with original -> digest pairs.
    Returns the number of records written.
    """
    n = 0
    for rec in records:
        digest, anon = anonymize_record(rec)
        if mapping is not None:
            mapping[rec.header] = digest
        sink.write(render_record(anon, file_format))
        n += 1
    return n
