"""
Error taxonomy shared by the readers, the hashing engines and the CLI.
Each error carries the exit code the CLI reports for it.
"""
from __future__ import annotations
from typing import Optional, Sequence


class FastxAnonError(Exception):
    exit_code = 1


class UnknownFormatError(FastxAnonError):
    """First decoded character is neither '>' (FASTA) nor '@' (FASTQ)."""
    exit_code = 3


class MalformedRecordError(FastxAnonError):
    """A FASTQ quartet violates the 4-line framing."""
    exit_code = 4

    def __init__(self, message: str, line: Optional[int] = None):
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class MissingFieldError(FastxAnonError):
    exit_code = 5

    def __init__(self, column: str, available: Sequence[str] = ()):
        super().__init__(
            f"column '{column}' not found (available: {', '.join(available) or 'none'})"
        )
        self.column = column


class ConfigError(FastxAnonError):
    exit_code = 6
