"""
Batch (in-memory) hashing path.

The whole input is parsed into a list, split into batches, and the batches
are hashed/rendered on a joblib pool that lives only for one `hash()` call.
joblib returns batch results in submission order, so output order equals
input order regardless of which worker finishes first.
"""
from __future__ import annotations
import itertools
from enum import Enum
from typing import Dict, List, Optional, TextIO, Tuple

from joblib import Parallel, delayed

from ..io.fastx import FileFormat, Record, parse_fastx
from ..io.writer import render_record
from .anonymize import anonymize_record


class HashState(str, Enum):
    NOT_STARTED = "not_started"
    LOADED = "loaded"
    HASHED = "hashed"
    WRITTEN = "written"
    DONE = "done"


# ------------- batch worker -------------
def hash_batch(batch: List[Record],
               file_format: FileFormat) -> List[Tuple[str, str, str]]:
    """
    Hash and render a list of records.
    Returns (original_header, digest, rendered_text) per record.
    """
    out = []
    for rec in batch:
        digest, anon = anonymize_record(rec)
        out.append((rec.header, digest, render_record(anon, file_format)))
    return out


class ParallelHasher:
    """
    NOT_STARTED -> load() -> LOADED -> hash() -> HASHED
                -> write(sink) -> WRITTEN -> finish() -> DONE
    """

    def __init__(self,
                 input_path,
                 file_format: FileFormat,
                 *,
                 n_jobs: int = 1,
                 batch_size: int = 500,
                 strict_quality: bool = False,
                 collect_mapping: bool = False):
        if n_jobs < 1:
            raise ValueError("n_jobs must be >= 1")
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        self.input_path = input_path
        self.file_format = file_format
        self.n_jobs = n_jobs
        self.batch_size = batch_size
        self.strict_quality = strict_quality
        self.collect_mapping = collect_mapping

        self.state = HashState.NOT_STARTED
        self.records: List[Record] = []
        self.rendered: List[str] = []
        self.mapping: Optional[Dict[str, str]] = {} if collect_mapping else None
        self.n_written = 0

    def _expect(self, state: HashState, step: str):
        if self.state is not state:
            raise RuntimeError(f"cannot {step}() in state '{self.state.value}'")

    # ---------------------------------------------------------------- load
    def load(self) -> int:
        self._expect(HashState.NOT_STARTED, "load")
        self.records = list(parse_fastx(self.input_path, self.file_format,
                                        strict_quality=self.strict_quality))
        self.state = HashState.LOADED
        return len(self.records)

    # ---------------------------------------------------------------- hash
    def hash(self) -> int:
        self._expect(HashState.LOADED, "hash")
        records = iter(self.records)
        batches = iter(lambda: list(itertools.islice(records, self.batch_size)), [])

        results = Parallel(n_jobs=self.n_jobs, prefer="threads")(
            delayed(hash_batch)(batch, self.file_format) for batch in batches
        )

        for original, digest, text in itertools.chain(*results):
            if self.mapping is not None:
                self.mapping[original] = digest
            self.rendered.append(text)
        self.records = []
        self.state = HashState.HASHED
        return len(self.rendered)

    # --------------------------------------------------------------- write
    def write(self, sink: TextIO) -> int:
        self._expect(HashState.HASHED, "write")
        for text in self.rendered:
            sink.write(text)
        self.n_written = len(self.rendered)
        self.rendered = []
        self.state = HashState.WRITTEN
        return self.n_written

    # -------------------------------------------------------------- finish
    def finish(self) -> Optional[Dict[str, str]]:
        self._expect(HashState.WRITTEN, "finish")
        self.state = HashState.DONE
        return self.mapping

    def run(self, sink: TextIO) -> Optional[Dict[str, str]]:
        """Drive all transitions; output is written only after every batch hashed."""
        self.load()
        self.hash()
        self.write(sink)
        return self.finish()
