#!/usr/bin/env python3
from __future__ import annotations

import argparse
import statistics
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "python"))

from lazyrecord import make_factory  # noqa: E402


def _expensive(work: int):
    def compute(source, record):
        total = 0
        for i in range(work):
            total += (source * i) % 7
        return total

    return compute


def _run_once(fn, records: int) -> float:
    start = time.perf_counter()
    for source in range(records):
        fn(source)
    end = time.perf_counter()
    return (end - start) * 1000.0


def _summarize(label: str, samples: list[float]) -> None:
    samples.sort()
    p95 = statistics.quantiles(samples, n=20, method="inclusive")[-1]
    print(f"{label}:")
    print(f"  mean: {statistics.fmean(samples):.3f} ms")
    print(f"  median: {statistics.median(samples):.3f} ms")
    print(f"  p95: {p95:.3f} ms")
    print(f"  stdev: {statistics.pstdev(samples):.3f} ms")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Compare lazy records against eagerly built dicts "
        "when only some fields are read.",
    )
    parser.add_argument("--iterations", type=int, default=30)
    parser.add_argument("--warmup", type=int, default=5)
    parser.add_argument("--records", type=int, default=1000)
    parser.add_argument("--fields", type=int, default=20)
    parser.add_argument("--read", type=int, default=2, help="Fields read per record.")
    parser.add_argument("--work", type=int, default=50, help="Loop size per field.")
    args = parser.parse_args(argv)

    if args.iterations < 2:
        parser.error("--iterations must be at least 2")
    if args.warmup < 0:
        parser.error("--warmup cannot be negative")
    if not 0 <= args.read <= args.fields:
        parser.error("--read must be between 0 and --fields")

    fields = {f"f{i}": _expensive(args.work) for i in range(args.fields)}
    names = list(fields)[: args.read]
    construct = make_factory(fields)

    def lazy(source):
        record = construct(source)
        return [record[name] for name in names]

    def eager(source):
        record = {name: compute(source, None) for name, compute in fields.items()}
        return [record[name] for name in names]

    results: dict[str, list[float]] = {}
    for label, fn in (("lazy", lazy), ("eager", eager)):
        for _ in range(args.warmup):
            _run_once(fn, args.records)
        results[label] = [
            _run_once(fn, args.records) for _ in range(args.iterations)
        ]

    print(
        f"records: {args.records} fields: {args.fields} read: {args.read} "
        f"iterations: {args.iterations}"
    )
    for label, samples in results.items():
        _summarize(label, samples)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
