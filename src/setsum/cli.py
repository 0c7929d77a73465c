"""setsum CLI entry point.

Usage: uv run setsum [command]
"""
import argparse
import logging
import sys

from setsum.accumulator.setsum import Setsum

log = logging.getLogger(__name__)


def _add_digest_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "digest",
        help="Compute the setsum of elements read from files or stdin.",
    )
    p.add_argument(
        "files", nargs="*", metavar="FILE",
        help="Input files, one element per line (default: stdin)",
    )
    p.add_argument(
        "--remove", action="append", default=[], metavar="FILE",
        help="Remove the elements of FILE (may be repeated)",
    )
    p.add_argument(
        "--binary", action="store_true",
        help="Treat each whole file as a single element instead of lines.",
    )


def _add_combine_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "combine",
        help="Merge setsum digests (e.g. per-shard) into one.",
    )
    p.add_argument("digests", nargs="+", metavar="DIGEST")


def _add_subtract_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "subtract",
        help="Subtract digests from the first one.",
    )
    p.add_argument("base", metavar="DIGEST")
    p.add_argument("others", nargs="+", metavar="DIGEST")


def _add_verify_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "verify-compaction",
        help="Check inputs == outputs + garbage. Exit 1 on mismatch.",
    )
    p.add_argument("--inputs", required=True, metavar="DIGEST")
    p.add_argument("--outputs", required=True, metavar="DIGEST")
    p.add_argument("--garbage", default=None, metavar="DIGEST")


def _add_profile_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "profile",
        help="Run the throughput benchmark.",
    )
    p.add_argument(
        "--elements", type=int, default=100_000,
        help="Number of elements to generate (default: 100000)",
    )
    p.add_argument(
        "--size", type=int, default=64,
        help="Typical element size in bytes (default: 64)",
    )
    p.add_argument(
        "--workers", type=int, default=4,
        help="Thread pool size for the parallel fold (default: 4)",
    )
    p.add_argument(
        "--seed", type=int, default=42,
        help="RNG seed for reproducible runs (default: 42)",
    )
    p.add_argument(
        "--cprofile", action="store_true",
        help="Enable cProfile and print top functions by cumulative time.",
    )


def _read_elements(path: str, binary: bool) -> list[bytes]:
    if path == "-":
        data = sys.stdin.buffer.read()
    else:
        with open(path, "rb") as f:
            data = f.read()
    if binary:
        return [data]
    if not data:
        return []
    lines = data.split(b"\n")
    if data.endswith(b"\n"):
        lines.pop()
    return lines


def _run_digest(args: argparse.Namespace) -> None:
    files = args.files or ["-"]
    if (files + args.remove).count("-") > 1:
        raise ValueError("stdin (-) can only be read once")
    setsum = Setsum()
    for path in files:
        elements = _read_elements(path, args.binary)
        setsum.insert_all(elements)
        log.debug("inserted %d elements from %s", len(elements), path)
    for path in args.remove:
        elements = _read_elements(path, args.binary)
        setsum.remove_all(elements)
        log.debug("removed %d elements from %s", len(elements), path)
    print(setsum.hexdigest())


def _run_combine(args: argparse.Namespace) -> None:
    total = Setsum()
    for digest in args.digests:
        total.merge(Setsum.from_digest(digest))
    print(total.hexdigest())


def _run_subtract(args: argparse.Namespace) -> None:
    result = Setsum.from_digest(args.base)
    for digest in args.others:
        result.unmerge(Setsum.from_digest(digest))
    print(result.hexdigest())


def _run_verify(args: argparse.Namespace) -> int:
    from setsum.verify.compaction import verify_compaction

    garbage = None
    if args.garbage is not None:
        garbage = Setsum.from_digest(args.garbage)
    result = verify_compaction(
        Setsum.from_digest(args.inputs),
        Setsum.from_digest(args.outputs),
        garbage,
    )
    if result.is_balanced:
        print("balanced")
        return 0
    print(result.error_message)
    print(f"discrepancy: {result.discrepancy_digest}")
    return 1


def _run_profile(args: argparse.Namespace) -> None:
    from setsum.profiling.harness import run_benchmark
    from setsum.profiling.report import format_report

    result = run_benchmark(
        num_elements=args.elements,
        element_size=args.size,
        workers=args.workers,
        seed=args.seed,
        profile=args.cprofile,
    )
    print(format_report(result))
    if result.cprofile_stats:
        print()
        print("--- cProfile top functions ---")
        print(result.cprofile_stats)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="setsum",
        description="Order-independent, invertible multiset checksums.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log debug output to stderr.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_digest_parser(subparsers)
    _add_combine_parser(subparsers)
    _add_subtract_parser(subparsers)
    _add_verify_parser(subparsers)
    _add_profile_parser(subparsers)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == "digest":
            _run_digest(args)
        elif args.command == "combine":
            _run_combine(args)
        elif args.command == "subtract":
            _run_subtract(args)
        elif args.command == "verify-compaction":
            return _run_verify(args)
        elif args.command == "profile":
            _run_profile(args)
    except (ValueError, OSError) as exc:
        print(f"setsum: error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
