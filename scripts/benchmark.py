#!/usr/bin/env python3
"""Benchmark script for blockfilter performance testing.

Outputs results in JSON format compatible with github-action-benchmark.
"""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blockfilter import Block

INCLUDE_EXPR = 'account == "eosio.token" && action == "transfer" && "alice" in auth'
EXCLUDE_EXPR = 'receiver.startsWith("spam") || data.memo.contains("airdrop")'


def benchmark_import_time() -> float:
    """Measure import time of blockfilter package."""
    start = time.perf_counter()
    import blockfilter  # noqa: F401

    return time.perf_counter() - start


def make_synthetic_block(number: int, transactions: int, actions: int) -> Block:
    """Block with a mix of matching, excluded and unrelated actions."""
    from blockfilter import ActionRecord, Block, PermissionLevel, TransactionRecord

    alice = (PermissionLevel(actor="alice", permission="active"),)
    accounts = ("eosio.token", "spammer", "eosio")
    trxs = []
    for t in range(transactions):
        trx_actions = [
            ActionRecord(
                receiver=accounts[(t + a) % 3],
                account="eosio.token" if a % 2 == 0 else accounts[a % 3],
                name="transfer",
                authorization=alice,
                data={"memo": "airdrop" if a % 5 == 0 else "payment"},
                action_ordinal=a + 1,
                creator_action_ordinal=0 if a == 0 else 1,
            )
            for a in range(actions)
        ]
        trxs.append(TransactionRecord(id=f"{number:08x}{t:04x}", actions=trx_actions))
    return Block(id=f"{number:08x}", number=number, unfiltered_transactions=trxs)


def benchmark_compile(iterations: int) -> float:
    """Measure filter construction time (both expressions)."""
    from blockfilter import build

    start = time.perf_counter()
    for _ in range(iterations):
        build(INCLUDE_EXPR, EXCLUDE_EXPR)
    return time.perf_counter() - start


def benchmark_transform(blocks: int, include: str, exclude: str) -> float:
    """Measure transform time over freshly built synthetic blocks."""
    from blockfilter import build

    block_filter = build(include, exclude)
    prepared = [make_synthetic_block(n, transactions=50, actions=6) for n in range(blocks)]

    start = time.perf_counter()
    for block in prepared:
        block_filter.transform_block(block)
    return time.perf_counter() - start


def main() -> None:
    """Run benchmarks and output results."""
    parser = argparse.ArgumentParser(description="Run blockfilter benchmarks")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("benchmark-results.json"),
        help="Output file for benchmark results",
    )
    parser.add_argument(
        "--blocks",
        type=int,
        default=200,
        help="Synthetic blocks per transform benchmark",
    )
    args = parser.parse_args()

    results = [
        {
            "name": "Import Time",
            "unit": "seconds",
            "value": benchmark_import_time(),
        },
        {
            "name": "Compile (1k filters)",
            "unit": "seconds",
            "value": benchmark_compile(1000),
        },
        {
            "name": f"Transform no-op ({args.blocks} blocks)",
            "unit": "seconds",
            "value": benchmark_transform(args.blocks, "", ""),
        },
        {
            "name": f"Transform include+exclude ({args.blocks} blocks)",
            "unit": "seconds",
            "value": benchmark_transform(args.blocks, INCLUDE_EXPR, EXCLUDE_EXPR),
        },
    ]

    # Write results
    args.output.write_text(json.dumps(results, indent=2))
    print(f"Benchmark results written to {args.output}")
    for r in results:
        print(f"  {r['name']}: {r['value']:.4f} {r['unit']}")


if __name__ == "__main__":
    main()
