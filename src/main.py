from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import BinaryIO, TextIO

from errors import RESPException
from limits import ParserLimits
from parser import parse_all
from protocol import BulkString, RESPArray
from serializer import serialize_into

log = logging.getLogger(__name__)


def decode(source: BinaryIO, out: TextIO, limits: ParserLimits) -> int:
    values = parse_all(source.read(), limits)
    for value in values:
        print(repr(value), file=out)
    log.info("Decoded %d value(s)", len(values))
    return len(values)


def encode(args: list[str], sink: BinaryIO) -> None:
    command = RESPArray(tuple(BulkString(arg.encode()) for arg in args))
    serialize_into(command, sink)
    sink.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="resp", description="Decode or encode RESP messages.")
    sub = parser.add_subparsers(dest="command", required=True)

    dec = sub.add_parser("decode", help="print every value found in the input")
    dec.add_argument("file", nargs="?", help="input file (default: stdin)")

    enc = sub.add_parser("encode", help="write the arguments as a RESP command array")
    enc.add_argument("args", nargs="+")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        if args.command == "decode":
            limits = ParserLimits.from_env()
            if args.file:
                with open(args.file, "rb") as fh:
                    decode(fh, sys.stdout, limits)
            else:
                decode(sys.stdin.buffer, sys.stdout, limits)
        else:
            encode(args.args, sys.stdout.buffer)
    except (RESPException, ValueError, OSError) as e:
        log.error("%s failed: %s", args.command, e)
        return 1

    return 0


def run() -> None:
    logging.basicConfig(level=os.getenv("RESP_LOG_LEVEL", "WARNING").upper())
    sys.exit(main())


if __name__ == "__main__":
    run()
