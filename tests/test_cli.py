import gzip
import json

from typer.testing import CliRunner
from fastx_anon.pipeline.cli import app
from conftest import expected_digest

runner = CliRunner()


def test_hash_command(write_file, tmp_path):
    src = write_file("in.fq", "@r1\nACGT\n+\n!!!!\n")
    out, csv = tmp_path / "out.fq", tmp_path / "map.csv"
    result = runner.invoke(app, ["hash", "-i", str(src), "-o", str(out), "-c", str(csv)])
    assert result.exit_code == 0, result.output
    assert out.read_text() == f"@{expected_digest('r1')}\nACGT\n+\n!!!!\n"
    assert csv.read_text().splitlines()[0] == "header_original,header_hashed"


def test_hash_command_config_file(write_file, tmp_path):
    src = write_file("in.fa", ">a\nAC\n>b\nGT\n")
    out, mapping = tmp_path / "out.fa.gz", tmp_path / "map.json"
    cfg = write_file("cfg.json", json.dumps({
        "thread_count": 2, "gzip_output": True, "mapping_path": str(mapping),
    }))
    result = runner.invoke(app, ["hash", "-i", str(src), "-o", str(out),
                                 "--config", str(cfg), "--quiet"])
    assert result.exit_code == 0, result.output
    assert out.read_bytes()[:2] == b"\x1f\x8b"
    assert json.loads(mapping.read_text()) == {
        "a": expected_digest("a"), "b": expected_digest("b"),
    }


def test_cli_flag_overrides_config(write_file, tmp_path):
    src = write_file("in.fa", ">a\nAC\n")
    out = tmp_path / "out.fa"
    cfg = write_file("cfg.json", json.dumps({"gzip_output": True}))
    result = runner.invoke(app, ["hash", "-i", str(src), "-o", str(out),
                                 "--config", str(cfg), "--no-gzip", "-q"])
    assert result.exit_code == 0, result.output
    assert out.read_text() == f">{expected_digest('a')}\nAC\n"


def test_exit_codes(write_file, tmp_path):
    out = tmp_path / "out"
    cases = [
        (write_file("bad.txt", "xyz\n"), 3),
        (write_file("bad.fq", "@r1\nACGT\n+\n"), 4),
        (tmp_path / "missing.fa", 2),
    ]
    for src, code in cases:
        result = runner.invoke(app, ["hash", "-i", str(src), "-o", str(out)])
        assert result.exit_code == code, result.output


def _damaged_gzip(write_file, name: str, flip: bool):
    body = "".join(f"@read_{i} x={i * 7919}\nACGT{i}\n+\nIIII{i}\n" for i in range(300))
    data = bytearray(gzip.compress(body.encode()))
    if flip:
        for i in range(20, 60):
            data[i] ^= 0xFF
    else:
        data = data[: len(data) // 2]
    return write_file(name, bytes(data), compress=False)


def test_damaged_gzip_is_io_error(write_file, tmp_path):
    for name, flip in [("half.fq.gz", False), ("flipped.fq.gz", True)]:
        src = _damaged_gzip(write_file, name, flip)
        result = runner.invoke(app, ["hash", "-i", str(src), "-o", str(tmp_path / "o.fq")])
        assert result.exit_code == 2, result.output


def test_bad_config(write_file, tmp_path):
    src = write_file("in.fa", ">a\nAC\n")
    cfg = write_file("cfg.json", json.dumps({"threads": 2}))
    result = runner.invoke(app, ["hash", "-i", str(src), "-o", str(tmp_path / "o"),
                                 "--config", str(cfg)])
    assert result.exit_code == 6


def test_converter_commands(write_file, tmp_path):
    fa = write_file("in.fa", ">s1\nACGT\n")
    csv, back = tmp_path / "t.csv", tmp_path / "back.fa"
    assert runner.invoke(app, ["fasta-to-csv", "-i", str(fa), "-o", str(csv)]).exit_code == 0
    result = runner.invoke(app, ["csv-to-fasta", "-i", str(csv), "-q", "header",
                                 "-s", "sequence", "-o", str(back)])
    assert result.exit_code == 0, result.output
    assert back.read_text() == ">s1\nACGT\n"

    result = runner.invoke(app, ["csv-to-fastq", "-i", str(csv), "-q", "header",
                                 "-s", "sequence", "-u", "quality", "-o", str(tmp_path / "x.fq")])
    assert result.exit_code == 5
