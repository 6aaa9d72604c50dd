from __future__ import annotations
import gzip
from enum import Enum
from typing import TextIO

GZIP_MAGIC = b"\x1f\x8b"
ENCODING = "utf-8"
# headers may hold arbitrary bytes; keep them intact through decode/encode
ENCODING_ERRORS = "surrogateescape"


class Compression(str, Enum):
    PLAIN = "plain"
    GZIP = "gzip"


def detect_compression(path) -> Compression:
    """Return GZIP when the file starts with the two gzip magic bytes."""
    with open(path, "rb") as fh:
        magic = fh.read(2)
    return Compression.GZIP if magic == GZIP_MAGIC else Compression.PLAIN


def open_input(path, compression: Compression | None = None) -> TextIO:
    """
    Open `path` as a decoded text stream, gunzipping transparently.

    The magic bytes are read through a separate handle, so the stream
    returned here always starts at byte 0.
    """
    if compression is None:
        compression = detect_compression(path)
    if compression is Compression.GZIP:
        return gzip.open(path, "rt", encoding=ENCODING, errors=ENCODING_ERRORS, newline="\n")
    return open(path, "r", encoding=ENCODING, errors=ENCODING_ERRORS, newline="\n")


def open_output(path, gzip_output: bool = False) -> TextIO:
    """Text sink for `path`; gzip-compressing when asked, same interface either way."""
    if gzip_output:
        return gzip.open(path, "wt", encoding=ENCODING, errors=ENCODING_ERRORS, newline="")
    return open(path, "w", encoding=ENCODING, errors=ENCODING_ERRORS, newline="")
