"""Tests for the artifact upload collaborator."""

from pathlib import Path

import pytest

from model import InputError
from upload import DirectoryUploader, build_object_key


def test_build_object_key():
    assert build_object_key("a.csv") == "a.csv"
    assert build_object_key("a.csv", "  ") == "a.csv"
    assert build_object_key("a.csv", "daily") == "daily/a.csv"
    assert build_object_key("a.csv", "daily/") == "daily/a.csv"


def test_directory_uploader_copies_and_returns_uri(tmp_path):
    src = tmp_path / "out.csv"
    src.write_text("t,a\n")
    uploader = DirectoryUploader(str(tmp_path / "bucket"), key_prefix="daily")
    locator = uploader.upload(str(src))

    target = tmp_path / "bucket" / "daily" / "out.csv"
    assert target.read_text() == "t,a\n"
    assert locator == target.resolve().as_uri()
    assert locator.startswith("file://")


def test_directory_uploader_missing_file(tmp_path):
    with pytest.raises(InputError):
        DirectoryUploader(str(tmp_path)).upload(str(Path(tmp_path) / "missing.csv"))
