from .anonymize import (
    DIGEST_LENGTH,
    digest_header,
    anonymize_record,
    stream_anonymize,
)
from .parallel import HashState, ParallelHasher, hash_batch

__all__ = [
    "DIGEST_LENGTH",
    "digest_header",
    "anonymize_record",
    "stream_anonymize",
    "HashState",
    "ParallelHasher",
    "hash_batch",
]
