"""main.py

CLI entrypoint for the time series gap filler.

Usage (examples):
  gapfill --input-files data.csv --suffix filled
  gapfill --input-dir ./raw --output-dir ./output --summary-json ./output/summary.json

Outputs, per input file:
 - <base>[_<suffix>]<ext> with the densified, interpolated rows and a statistics block
 - optional JSON summary of every run
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, Optional

from config import RunConfig, apply_overrides, load_config
from export import write_json_summary
from ingest import find_csvs_in_dir
from model import GapFillError
from pipeline import process_file
from upload import DirectoryUploader


LOG = logging.getLogger("gapfill")


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)s %(message)s",
        handlers=handlers,
    )


def resolve_config(args: argparse.Namespace) -> RunConfig:
    config = load_config(args.config) if args.config else RunConfig()
    return apply_overrides(
        config,
        suffix=args.suffix,
        output_dir=args.output_dir,
        on_misaligned=args.on_misaligned,
        summary_json=args.summary_json,
        upload_dir=args.upload_dir,
        upload_key_prefix=args.upload_prefix,
        log_level=args.log_level,
        log_file=args.log_file,
    )


def run(args: argparse.Namespace) -> int:
    config = resolve_config(args)
    setup_logging(config.log_level, config.log_file)

    if args.input_files:
        paths = args.input_files
    else:
        try:
            paths = find_csvs_in_dir(args.input_dir)
        except OSError as e:
            LOG.error("cannot list input directory %s: %s", args.input_dir, e)
            return 2
    LOG.info("Found %d CSV files", len(paths))
    if not paths:
        LOG.error("no input files")
        return 2

    uploader = DirectoryUploader(config.upload_dir, config.upload_key_prefix) if config.upload_dir else None
    summaries: Dict[str, Any] = {}
    failures = 0
    for path in paths:
        try:
            result = process_file(
                path,
                suffix=config.suffix,
                output_dir=config.output_dir,
                on_misaligned=config.on_misaligned,
            )
        except (GapFillError, OSError) as e:
            LOG.error("%s: %s", path, e)
            summaries[path] = {"error": str(e)}
            failures += 1
            continue
        print(result.output_path)
        summaries[path] = dict(result.summary, output=result.output_path)
        if uploader is not None:
            try:
                summaries[path]["uploaded_to"] = uploader.upload(result.output_path)
            except Exception as e:
                LOG.exception("upload of %s failed: %s", result.output_path, e)

    if config.summary_json:
        write_json_summary(summaries, config.summary_json)
        LOG.info("Summary written to %s", config.summary_json)

    LOG.info("Processed %d file(s), %d failed", len(paths), failures)
    return 1 if failures else 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Fill gaps in irregularly sampled time series CSV files")
    p.add_argument("--input-dir", default=".", help="Directory with CSV files")
    p.add_argument("--input-files", nargs="*", help="Explicit CSV paths (overrides input-dir)")
    p.add_argument("--config", help="YAML config file")
    p.add_argument("--suffix", help="Suffix appended to output file names")
    p.add_argument("--output-dir", help="Output directory (default: next to each input)")
    p.add_argument("--on-misaligned", choices=["raise", "drop"], help="Policy for off-grid timestamps")
    p.add_argument("--summary-json", help="Write a JSON summary of all runs here")
    p.add_argument("--upload-dir", help="Copy finished files into this directory")
    p.add_argument("--upload-prefix", help="Key prefix below upload-dir")
    p.add_argument("--log-level", help="Logging level")
    p.add_argument("--log-file", help="Also log to this file")
    return p


def cli(argv=None):
    args = build_parser().parse_args(argv)
    raise SystemExit(run(args))


if __name__ == "__main__":
    cli(sys.argv[1:])
