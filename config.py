"""config.py

Run configuration: defaults, optional YAML file, command-line overrides.

Example file:

    suffix: filled
    output_dir: ./output
    on_misaligned: drop
    summary_json: ./output/summary.json
    upload_dir: /mnt/shared/gapfill
    upload_key_prefix: daily
    log_level: DEBUG
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from clean import MISALIGNED_POLICIES


@dataclass(frozen=True)
class RunConfig:
    suffix: str = ""
    output_dir: Optional[str] = None
    on_misaligned: str = "raise"
    summary_json: Optional[str] = None
    upload_dir: Optional[str] = None
    upload_key_prefix: str = ""
    log_level: str = "INFO"
    log_file: Optional[str] = None


def load_config(config_path: str) -> RunConfig:
    """Load a RunConfig from YAML; missing keys keep their defaults."""
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r") as f:
        data: Dict[str, Any] = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    known = {fld.name for fld in dataclasses.fields(RunConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {unknown}")
    for key, value in data.items():
        # every field is text; YAML reads date stamps like 20250101 as int
        if value is None:
            continue
        if isinstance(value, (dict, list)):
            raise ValueError(f"Config key {key!r} in {path} must be a scalar, got {value!r}")
        data[key] = str(value)
    config = RunConfig(**data)
    if config.on_misaligned not in MISALIGNED_POLICIES:
        raise ValueError(f"on_misaligned must be one of {MISALIGNED_POLICIES}, got {config.on_misaligned!r}")
    return config


def apply_overrides(config: RunConfig, **values: Any) -> RunConfig:
    """Return a copy with every non-None value applied."""
    changes = {k: v for k, v in values.items() if v is not None}
    return dataclasses.replace(config, **changes)
