"""
Command-line front end.

Usage:
    cfr2json PATH [--part PART] [--log-level LEVEL]

Example:
    cfr2json CFR-2019-title42-vol4.xml --part 433 > 433.json
"""

import argparse
import sys
from typing import List, Optional

from regtree import config
from regtree.exceptions import RegTreeError
from regtree.services.converter import convert_file
from regtree.utils.logging import LEVELS, configure_logging, get_logger

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Convert a CFR XML volume into a labeled JSON regulation tree")
    parser.add_argument("path", help="CFR XML volume, e.g. CFR-2019-title42-vol4.xml")
    parser.add_argument("--part", default=config.DEFAULT_PART,
                        help="Emit the first part whose header contains this value")
    parser.add_argument("--indent", type=int, default=config.JSON_INDENT, help="JSON indentation")
    parser.add_argument("--log-level", default=config.LOG_LEVEL.lower(),
                        choices=[name.lower() for name in LEVELS],
                        help="Log level")
    parser.add_argument("--log-file", default=config.LOG_FILE, help="Also write logs to this file")
    return parser.parse_args(argv)


def write_output(text: str, stream=None):
    """Write ``text`` as UTF-8 whatever the stream's own encoding is."""
    stream = stream or sys.stdout
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        stream.write(text + "\n")
        return
    stream.flush()
    buffer.write(text.encode("utf-8") + b"\n")
    buffer.flush()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    try:
        output = convert_file(args.path, args.part, indent=args.indent)
    except RegTreeError as e:
        logger.error(str(e))
        return 1

    write_output(output)
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
