"""Tests for the command line entrypoint."""

import json

import pytest

from main import build_parser, run


def write_input(path, body):
    path.write_text("timestamp,value\n" + body, encoding="utf8")
    return str(path)


GOOD = "2025-01-01T00:00:00Z,10\n2025-01-01T01:00:00Z,\n2025-01-01T02:00:00Z,20\n"


def test_run_processes_files_and_writes_summary(tmp_path, capsys):
    src = write_input(tmp_path / "good.csv", GOOD)
    summary = tmp_path / "summary.json"
    args = build_parser().parse_args(
        ["--input-files", src, "--suffix", "filled", "--summary-json", str(summary)]
    )
    assert run(args) == 0

    out_path = str(tmp_path / "good_filled.csv")
    assert capsys.readouterr().out.strip() == out_path
    lines = open(out_path, encoding="utf8").read().splitlines()
    assert lines[2] == "2025-01-01T01:00:00Z,15.0"

    data = json.loads(summary.read_text())
    assert data[src]["output"] == out_path
    assert data[src]["interpolated_cells"] == {"value": 1}


def test_bad_file_does_not_stop_the_run(tmp_path):
    bad = write_input(tmp_path / "a_bad.csv", "2025-01-01T00:00:00Z,1\n")
    good = write_input(tmp_path / "b_good.csv", GOOD)
    summary = tmp_path / "summary.json"
    args = build_parser().parse_args(
        ["--input-dir", str(tmp_path), "--suffix", "x", "--summary-json", str(summary)]
    )
    assert run(args) == 1
    assert (tmp_path / "b_good_x.csv").exists()
    data = json.loads(summary.read_text())
    assert "at least 2 rows" in data[bad]["error"]
    assert data[good]["completed_rows"] == 3


def test_config_file_and_upload(tmp_path):
    src = write_input(tmp_path / "good.csv", GOOD)
    config = tmp_path / "gapfill.yaml"
    config.write_text(f"suffix: cfg\nupload_dir: {tmp_path / 'bucket'}\nupload_key_prefix: runs\n")
    args = build_parser().parse_args(["--input-files", src, "--config", str(config)])
    assert run(args) == 0
    assert (tmp_path / "good_cfg.csv").exists()
    assert (tmp_path / "bucket" / "runs" / "good_cfg.csv").exists()


def test_no_inputs(tmp_path):
    args = build_parser().parse_args(["--input-dir", str(tmp_path)])
    assert run(args) == 2


def test_cli_rejects_unknown_policy():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--on-misaligned", "snap"])


def test_missing_input_dir(tmp_path):
    args = build_parser().parse_args(["--input-dir", str(tmp_path / "nowhere")])
    assert run(args) == 2
