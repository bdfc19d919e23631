# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Collapse repeated audit runs into one score per category.

Each variant is audited several times in parallel. The default strategy
keeps the best run per category.

Every strategy returns a score that was actually observed in one of the
runs. "median" is the low median for that reason; with an even number of
runs it picks the lower middle value instead of averaging the two.
"""

import statistics
from collections.abc import Callable, Sequence

from perfgate.evaluation.exceptions import ReportLoadError
from perfgate.evaluation.models import AggregatedResult, Report
from perfgate.logging.logger import get_logger

logger = get_logger(__name__)

AggregationFn = Callable[[Sequence[float]], float]

AGGREGATION_STRATEGIES: dict[str, AggregationFn] = {
    "best": max,
    "median": statistics.median_low,
    "first": lambda values: values[0],
}


def aggregate(
    reports: Sequence[Report],
    categories: Sequence[str],
    strategy: str = "best",
) -> AggregatedResult:
    """
    Aggregate one variant's reports into a single score per goal category.

    Args:
        reports: All reports for one variant, in load order.
        categories: The goal categories to aggregate.
        strategy: A key of AGGREGATION_STRATEGIES.

    Raises:
        ReportLoadError: No reports, mixed variants, or a report missing a category.
        ValueError: Unknown strategy name.
    """
    if strategy not in AGGREGATION_STRATEGIES:
        raise ValueError(
            f"Unknown aggregation strategy '{strategy}'. "
            f"Must be one of: {', '.join(sorted(AGGREGATION_STRATEGIES))}"
        )
    if not reports:
        raise ReportLoadError("Cannot aggregate an empty set of reports")

    variants = {r.variant for r in reports}
    if len(variants) != 1:
        raise ReportLoadError(
            f"Reports from different variants cannot be aggregated together: {sorted(variants)}"
        )
    variant = reports[0].variant

    pick = AGGREGATION_STRATEGIES[strategy]
    scores: dict[str, float] = {}
    for category in categories:
        values: list[float] = []
        for report in reports:
            if category not in report.scores:
                raise ReportLoadError(
                    f"Report {report.path.name} has no score for goal category '{category}'"
                )
            values.append(report.scores[category])
        scores[category] = pick(values)

    logger.debug(
        "Aggregated variant",
        extra={"variant": variant, "strategy": strategy, "runs": len(reports), "scores": scores},
    )

    return AggregatedResult(
        variant=variant,
        scores=scores,
        run_count=len(reports),
        strategy=strategy,
    )
