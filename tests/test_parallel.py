import io

import pytest
from fastx_anon.core import HashState, ParallelHasher, hash_batch, digest_header
from fastx_anon.errors import MalformedRecordError
from fastx_anon.io import FileFormat, Record
from fastx_anon.pipeline.driver import run_hash_pipeline
from fastx_anon.utils.mapping import read_header_mapping


def _fastq_text(n: int) -> str:
    return "".join(f"@read_{i} lane=1\nACGTN{i}\n+\nIIIII{i}\n" for i in range(n))

# ----------------------------------------------------------------------
def test_parallel_matches_streaming(write_file, tmp_path):
    src = write_file("in.fq", _fastq_text(57))
    seq_out, par_out = tmp_path / "s.fq", tmp_path / "p.fq"

    run_hash_pipeline(src, seq_out, verbose=False)
    summary = run_hash_pipeline(src, par_out, thread_count=4, batch_size=5, verbose=False)

    assert summary["mode"] == "parallel"
    assert summary["records"] == 57
    assert par_out.read_text() == seq_out.read_text()


def test_parallel_mapping_export(write_file, tmp_path):
    src = write_file("in.fa.gz", ">a\nAC\n>b\nGT\n>a\nTT\n>c\nGG\n")
    out, mapping = tmp_path / "o.fa", tmp_path / "m.json"
    summary = run_hash_pipeline(src, out, mapping_path=mapping,
                                thread_count=3, batch_size=1, verbose=False)
    assert summary["records"] == 4
    assert read_header_mapping(mapping) == {h: digest_header(h) for h in "abc"}


def test_parallel_truncated_fastq_writes_nothing(write_file, tmp_path):
    src = write_file("in.fq", _fastq_text(3) + "@tail\nACGT\n")
    out = tmp_path / "o.fq"
    with pytest.raises(MalformedRecordError):
        run_hash_pipeline(src, out, thread_count=2, verbose=False)
    assert not out.exists()

# ----------------------------------------------------------------------
def test_state_machine(write_file):
    src = write_file("in.fa", ">a\nAC\n>b\nGT\n")
    hasher = ParallelHasher(src, FileFormat.FASTA, n_jobs=2, collect_mapping=True)
    assert hasher.state is HashState.NOT_STARTED

    with pytest.raises(RuntimeError):
        hasher.hash()

    assert hasher.load() == 2
    assert hasher.state is HashState.LOADED
    assert hasher.hash() == 2
    assert hasher.state is HashState.HASHED

    sink = io.StringIO()
    assert hasher.write(sink) == 2
    assert hasher.state is HashState.WRITTEN
    assert hasher.finish() == {"a": digest_header("a"), "b": digest_header("b")}
    assert hasher.state is HashState.DONE

    with pytest.raises(RuntimeError):
        hasher.load()


def test_run_without_mapping(write_file):
    src = write_file("in.fq", _fastq_text(4))
    sink = io.StringIO()
    assert ParallelHasher(src, FileFormat.FASTQ, n_jobs=2, batch_size=3).run(sink) is None
    assert sink.getvalue().count("\n+\n") == 4


def test_hash_batch_preserves_order():
    batch = [Record("x", "A"), Record("y", "C")]
    out = hash_batch(batch, FileFormat.FASTA)
    assert [o[0] for o in out] == ["x", "y"]
    assert out[1] == ("y", digest_header("y"), f">{digest_header('y')}\nC\n")


@pytest.mark.parametrize("kwargs", [{"n_jobs": 0}, {"batch_size": 0}])
def test_invalid_pool_sizes(kwargs):
    with pytest.raises(ValueError):
        ParallelHasher("unused", FileFormat.FASTA, **kwargs)
