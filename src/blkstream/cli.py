from __future__ import annotations
import argparse, json, logging, sys

from .binary.errors import ParseError
from .config import ScanConfig

logger = logging.getLogger(__name__)


def _positive_int(s: str) -> int:
    v = int(s)
    if v <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {v}")
    return v


def _scan_config(args) -> ScanConfig:
    kwargs = {"aligned": not args.unaligned}
    if args.max_attempts is not None:
        kwargs["max_attempts"] = args.max_attempts
    return ScanConfig(**kwargs)


def cmd_info(args):
    cfg = _scan_config(args)

    # Fast path: counts only
    if args.summary:
        from .binary.reader import summarize_stream
        records, total = summarize_stream(args.input, scan_config=cfg, max_records=args.sample)
        print(f"records={records}, bytes={total}")
        return 0

    # Sample mode: dump a bounded number of records
    from .binary.reader import iter_records
    out = []
    for rec in iter_records(args.input, scan_config=cfg, max_records=args.sample):
        out.append(rec.model_dump(mode="json"))
    print(json.dumps(out, indent=2))
    if not out:
        print("Warning: no records found in the input", file=sys.stderr)
    return 0


def cmd_varint(args):
    from .binary.codecs.compact_size import decode_compact_size
    try:
        buf = bytes.fromhex(args.hex)
    except ValueError as e:
        print(f"error: not a hex string: {e}", file=sys.stderr)
        return 2
    res = decode_compact_size(buf, args.offset)
    print(json.dumps(res.model_dump(mode="json", exclude_none=True), indent=2))
    return 0


def build_parser():
    p = argparse.ArgumentParser(prog="blkstream", description="Block-file record stream utilities")
    p.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("info", help="print framed records as JSON or a fast summary")
    sp.add_argument("input", help="Path to a blkNNNNN.dat style file")
    sp.add_argument("--summary", action="store_true", help="Print record and byte counts only")
    sp.add_argument("--sample", type=_positive_int, default=None, help="Stop after N records")
    sp.add_argument("--max-attempts", type=_positive_int, default=None, help="Cap on 4-byte reads per marker scan")
    sp.add_argument("--unaligned", action="store_true", help="Scan for markers one byte at a time")
    sp.set_defaults(func=cmd_info)

    sp = sub.add_parser("varint", help="decode a CompactSize integer from hex")
    sp.add_argument("hex", help="Hex bytes, e.g. fd0001")
    sp.add_argument("--offset", type=int, default=0, help="Byte offset of the encoding")
    sp.set_defaults(func=cmd_varint)

    return p


def main(argv=None):
    p = build_parser()
    ns = p.parse_args(argv)

    level = logging.WARNING
    if ns.verbose == 1:
        level = logging.INFO
    elif ns.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        return ns.func(ns)
    except ParseError as e:
        logger.debug("parse failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
