"""upload.py

Hand finished artifacts to a destination and get back a locator.

Only a local directory destination is provided; remote object storage clients
plug in through the Uploader protocol.
"""
from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Protocol

from model import InputError

LOG = logging.getLogger("gapfill.upload")


class Uploader(Protocol):
    def upload(self, path: str) -> str:
        ...


def build_object_key(file_name: str, key_prefix: str = "") -> str:
    prefix = (key_prefix or "").strip()
    if not prefix:
        return file_name
    if not prefix.endswith("/"):
        prefix += "/"
    return prefix + file_name


class DirectoryUploader:
    """Copy artifacts under `destination/<key>` and return a file:// URI."""

    def __init__(self, destination: str, key_prefix: str = ""):
        self.destination = Path(destination)
        self.key_prefix = key_prefix

    def upload(self, path: str) -> str:
        if not os.path.isfile(path):
            raise InputError(f"File does not exist: {path}")
        key = build_object_key(os.path.basename(path), self.key_prefix)
        target = self.destination / key
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(path, target)
        LOG.info("Uploaded %s to %s", path, target)
        return target.resolve().as_uri()
