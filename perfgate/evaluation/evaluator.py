# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The score evaluator: goals + reports + built bundle in, verdict out.

`evaluate` is a pure function over its inputs apart from stat-ing the bundle
file. Same goals, same reports, same artifact on disk, same Verdict. It never
prints, posts or writes anything; callers decide what to do with the result.

A below-goal score is a failed category in the Verdict, not an exception.
Exceptions are reserved for inputs that cannot be judged at all.
"""

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Optional

from perfgate.config.schema import GoalsConfig, PerfGateConfig
from perfgate.evaluation.aggregate import aggregate
from perfgate.evaluation.bundle import check_bundle_size
from perfgate.evaluation.exceptions import ReportLoadError
from perfgate.evaluation.models import CategoryVerdict, Report, VariantVerdict, Verdict
from perfgate.evaluation.reports import load_reports
from perfgate.logging.logger import get_logger

logger = get_logger(__name__)


def evaluate(
    goals: GoalsConfig,
    reports: Mapping[str, Sequence[Report]],
    artifact_directory: Optional[Path] = None,
) -> Verdict:
    """
    Judge every variant against the goals and check the bundle budget.

    Args:
        goals: The loaded goals declaration.
        reports: Reports grouped by variant, as returned by load_reports.
        artifact_directory: Where the built bundle lives. Defaults to the
            directory named in the bundle budget. Ignored when no budget is
            declared.

    Raises:
        ReportLoadError: No variants, or a variant with no usable reports.
        ArtifactNotFoundError: A budget is declared but no bundle matches.
    """
    if not reports:
        raise ReportLoadError("No report batches to evaluate")

    categories = goals.categories
    variant_verdicts: list[VariantVerdict] = []
    report_paths: list[Path] = []

    for variant, batch in reports.items():
        result = aggregate(batch, categories, strategy=goals.aggregation)
        variant_verdicts.append(
            VariantVerdict(
                variant=variant,
                categories=tuple(
                    CategoryVerdict(
                        category=category,
                        goal=goals.scores[category],
                        actual=result.scores[category],
                    )
                    for category in categories
                ),
                run_count=result.run_count,
            )
        )
        report_paths.extend(r.path for r in batch)

    bundle = None
    if goals.bundle is not None:
        directory = artifact_directory or Path(goals.bundle.artifact_directory)
        bundle = check_bundle_size(
            directory,
            goals.bundle.max_size_kb,
            goals.bundle.name_pattern,
            category=goals.bundle.category,
        )

    verdict = Verdict(
        variants=tuple(variant_verdicts),
        bundle=bundle,
        aggregation=goals.aggregation,
        report_paths=tuple(report_paths),
    )

    logger.info(
        "Evaluation finished",
        extra={
            "passed": verdict.passed,
            "failed": {
                v.variant: list(v.failed_categories) for v in verdict.variants if not v.passed
            },
            "bundle_within_budget": None if bundle is None else bundle.within_budget,
        },
    )

    return verdict


def run_evaluation(
    config: PerfGateConfig,
    reports_directory: Optional[Path] = None,
    artifact_directory: Optional[Path] = None,
    goals: Optional[GoalsConfig] = None,
) -> tuple[Verdict, dict[str, tuple[Report, ...]]]:
    """
    Load the reports named by the config and evaluate them.

    Explicit arguments override the config: `goals` replaces config.goals
    (used when goals come from package.json), and the directories replace
    the configured ones.

    Returns the verdict and the loaded reports, the latter for building links.
    """
    goals = goals or config.goals
    directory = reports_directory or Path(config.reports.directory)

    reports = load_reports(directory, goals.categories, config.reports.variants)
    verdict = evaluate(goals, reports, artifact_directory)
    return verdict, reports
