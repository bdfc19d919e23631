# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Verdict writer.

Writes the outcome of an evaluation run to disk:

    perfgate-results/
    ├── verdict.json   machine-readable verdict
    └── summary.md     the rendered review comment

verdict.json is the authoritative output. summary.md is the same data as a
reviewer sees it, kept so a later CI step can post it without re-running
the evaluation.
"""

import json
from pathlib import Path
from typing import Any

from perfgate.evaluation.models import Verdict
from perfgate.logging.logger import get_logger
from perfgate.utils.filesystem import atomic_write

logger = get_logger(__name__)

VERDICT_FILENAME = "verdict.json"
SUMMARY_FILENAME = "summary.md"


def verdict_to_dict(verdict: Verdict) -> dict[str, Any]:
    """Flatten a Verdict into plain JSON-serializable data, pass flags included."""
    bundle = None
    if verdict.bundle is not None:
        bundle = {
            "path": str(verdict.bundle.path),
            "category": verdict.bundle.category,
            "actual_kb": round(verdict.bundle.actual_kb, 2),
            "max_kb": verdict.bundle.max_kb,
            "within_budget": verdict.bundle.within_budget,
        }

    return {
        "passed": verdict.passed,
        "aggregation": verdict.aggregation,
        "variants": {
            v.variant: {
                "passed": v.passed,
                "run_count": v.run_count,
                "categories": {
                    c.category: {"goal": c.goal, "actual": c.actual, "passed": c.passed}
                    for c in v.categories
                },
            }
            for v in verdict.variants
        },
        "bundle": bundle,
        "reports": [str(p) for p in verdict.report_paths],
    }


def write_verdict(verdict: Verdict, summary: str, output_dir: Path) -> Path:
    """
    Write verdict.json and summary.md into output_dir, creating it if needed.

    Returns the output directory.
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    atomic_write(
        output_dir / VERDICT_FILENAME,
        json.dumps(verdict_to_dict(verdict), indent=2, sort_keys=True) + "\n",
    )
    atomic_write(output_dir / SUMMARY_FILENAME, summary)

    logger.info(
        "Verdict written",
        extra={"output_dir": str(output_dir), "passed": verdict.passed},
    )

    return output_dir
