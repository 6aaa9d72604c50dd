from __future__ import annotations
import gzip
import hashlib
import pathlib

import pytest


def expected_digest(header: str) -> str:
    return hashlib.sha256(header.encode()).hexdigest()[:12]


@pytest.fixture
def write_file(tmp_path: pathlib.Path):
    """Write text (or bytes) to tmp_path/name, gzipped when name ends in .gz."""
    def _write(name: str, content, compress: bool | None = None) -> pathlib.Path:
        path = tmp_path / name
        data = content.encode() if isinstance(content, str) else content
        if compress if compress is not None else name.endswith(".gz"):
            with gzip.open(path, "wb") as f:
                f.write(data)
        else:
            path.write_bytes(data)
        return path
    return _write
