import pytest

from tinyfst import cli

@pytest.fixture
def att_file(tmp_path):
    path = tmp_path / "small.att"
    path.write_text("0\t1\ta\tb\t0.5\n1\n", encoding="utf-8")
    return path

@pytest.fixture
def bad_att_file(tmp_path):
    path = tmp_path / "bad.att"
    path.write_text("0\t1\ta\tb\n0\ta\tb\n", encoding="utf-8")
    return path

def test_summary(att_file, capsys):
    assert cli.main([str(att_file)]) == 0

    out = capsys.readouterr().out
    assert out == ("Read FSA: 2 states, 1 arcs, 3 symbols\n"
                   "88 bytes\n")

def test_dump(att_file, capsys):
    assert cli.main(["--dump", str(att_file)]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Read FSA: 2 states, 1 arcs, 3 symbols"
    assert "1 = a" in out
    assert "0\t1\ta\tb\t0.500000" in out
    assert out[-1] == "88 bytes"

def test_reserve_options(att_file, capsys):
    assert cli.main(["--state-reserve", "1", "--arc-reserve", "1",
                     "--symbol-reserve", "1", str(att_file)]) == 0
    assert "88 bytes" in capsys.readouterr().out

def test_parse_failure(bad_att_file, capsys):
    assert cli.main([str(bad_att_file)]) == cli.EXIT_FAILURE

    captured = capsys.readouterr()
    assert captured.out == ""
    assert f"{bad_att_file}:2: cannot parse line with 3 columns" in captured.err
    assert f"Parsing {bad_att_file} failed" in captured.err

def test_missing_file(tmp_path, capsys):
    missing = tmp_path / "missing.att"
    assert cli.main([str(missing)]) == cli.EXIT_FAILURE

    err = capsys.readouterr().err
    assert err.startswith(f"Cannot read {missing}")
    assert "Parsing" not in err

def test_bad_encoding(tmp_path, capsys):
    path = tmp_path / "latin1.att"
    path.write_bytes(b"0\t1\t\xe4\tb\n")

    assert cli.main([str(path)]) == cli.EXIT_FAILURE
    assert "Cannot read" in capsys.readouterr().err

    assert cli.main(["--encoding", "latin-1", str(path)]) == 0

def test_usage_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])
    assert excinfo.value.code == 2
