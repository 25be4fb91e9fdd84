#!/usr/bin/env python3
"""Run all four ReviewBuilder variants and check they agree.

Loads products/reviews/users from the data directory with each I/O style
and compares the serialized results.

Usage:
    python scripts/compare_variants.py [data_dir]

Exit codes:
    0: All variants produced identical results
    1: A variant failed or results differ
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from reviewbuilder.adapter.storage import FileSourceReader  # noqa: E402
from reviewbuilder.loader.builder import ReviewBuilder  # noqa: E402
from reviewbuilder.models.types import AggregatedResult  # noqa: E402

# Constants
DEFAULT_DATA_DIR = PROJECT_ROOT / "data"


def run_callbacks(builder: ReviewBuilder) -> AggregatedResult:
    """Collect the callback variant's result."""
    results: list[AggregatedResult] = []
    builder.build_reviews_callbacks(results.append)
    return results[0]


async def run_deferred(builder: ReviewBuilder) -> AggregatedResult:
    """Await the deferred variant's future."""
    return await builder.build_reviews_deferred()


def run_variants(builder: ReviewBuilder) -> dict[str, str] | None:
    """Run every variant, returning serialized results by variant name."""
    variants = {
        "sync": builder.build_reviews_sync,
        "callbacks": lambda: run_callbacks(builder),
        "deferred": lambda: asyncio.run(run_deferred(builder)),
        "async": lambda: asyncio.run(builder.build_reviews_async()),
    }

    outputs: dict[str, str] = {}
    for name, run in variants.items():
        try:
            result = run()
        except Exception as e:
            print(f"FAIL: {name} - {type(e).__name__}: {e}")
            return None
        print(f"OK: {name} - {len(result.reviews)} reviews, {len(result.unresolved)} unresolved")
        outputs[name] = result.model_dump_json(by_alias=True)

    return outputs


def main() -> int:
    """Main entry point."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    data_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_DATA_DIR

    print("=" * 60)
    print(f"ReviewBuilder variant comparison ({data_dir})")
    print("=" * 60)

    builder = ReviewBuilder(FileSourceReader(data_dir))
    outputs = run_variants(builder)

    print("\n" + "=" * 60)
    if outputs is None:
        print("RESULT: FAILED")
        print("=" * 60)
        return 1

    baseline = outputs["sync"]
    mismatched = [name for name, output in outputs.items() if output != baseline]
    if mismatched:
        print(f"RESULT: results differ from sync for: {', '.join(mismatched)}")
        print("=" * 60)
        return 1

    print(f"RESULT: ALL VARIANTS AGREE ({len(outputs)} variants)")
    print("=" * 60)
    print(baseline)
    return 0


if __name__ == "__main__":
    sys.exit(main())
