#!/usr/bin/env python3
"""
CFR XML to JSON Converter

Converts every CFR XML volume under a directory into labeled regulation
trees, one JSON file per part.

Usage:
    python convert_cfr_xml_to_json.py [--input-dir INPUT_DIR] [--output-dir OUTPUT_DIR] [--part PART ...]

Example:
    python convert_cfr_xml_to_json.py --input-dir bulk --output-dir output.json --part 433
"""

import argparse
import sys

from regtree import config
from regtree.services.batch import VolumeConverter
from regtree.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Convert CFR XML volumes to labeled JSON trees")
    parser.add_argument("--input-dir", default="bulk", help="Directory containing CFR XML files")
    parser.add_argument("--output-dir", default="output.json", help="Directory to save JSON files")
    parser.add_argument("--part", action="append", dest="parts",
                        help="Only convert parts whose header contains this value (repeatable)")
    parser.add_argument("--workers", type=int, default=config.WORKERS, help="Worker processes")
    parser.add_argument("--log-file", default=config.LOG_FILE, help="Also write logs to this file")
    args = parser.parse_args()

    configure_logging(config.LOG_LEVEL, args.log_file)

    converter = VolumeConverter(args.input_dir, args.output_dir, parts=args.parts, workers=args.workers)
    report = converter.convert()

    for missing in report.missing:
        logger.warning(f"Part not found in {missing}")
    for error in report.errors:
        logger.error(error)

    print(f"Converted {report.volumes_converted} of {report.files_found} volumes, "
          f"wrote {len(report.written)} parts")
    return 1 if report.errors else 0


if __name__ == "__main__":
    sys.exit(main())
