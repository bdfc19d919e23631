# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Data models for the score evaluator.

These are frozen dataclasses: reports are written once by the audit tool
and read once here, and the verdict computed from them is a value, not
something later stages get to patch up.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Report:
    """
    One audit run's scores.

    Only goal categories are kept; anything else the audit tool reported is
    dropped at parse time. Scores are on the 0-100 scale.
    """

    variant: str
    run_id: str
    path: Path
    scores: dict[str, float]
    html_path: Optional[Path] = None


@dataclass(frozen=True)
class AggregatedResult:
    """One score per category for a variant, collapsed across its runs."""

    variant: str
    scores: dict[str, float]
    run_count: int
    strategy: str = "best"


@dataclass(frozen=True)
class CategoryVerdict:
    """Actual vs goal for one category in one variant."""

    category: str
    goal: float
    actual: float

    @property
    def passed(self) -> bool:
        return self.actual >= self.goal


@dataclass(frozen=True)
class VariantVerdict:
    """All category verdicts for one variant."""

    variant: str
    categories: tuple[CategoryVerdict, ...]
    run_count: int

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.categories)

    @property
    def failed_categories(self) -> tuple[str, ...]:
        return tuple(c.category for c in self.categories if not c.passed)


@dataclass(frozen=True)
class BundleCheck:
    """Measured size of the main bundle against its budget."""

    path: Path
    actual_kb: float
    max_kb: float
    category: str = "performance"

    @property
    def within_budget(self) -> bool:
        return self.actual_kb <= self.max_kb


@dataclass(frozen=True)
class Verdict:
    """
    The final decision for an evaluation run.

    Overall pass is a strict AND: every category in every variant meets its
    goal, and the bundle (when a budget is declared) fits. There is no
    averaging across categories or variants.
    """

    variants: tuple[VariantVerdict, ...]
    bundle: Optional[BundleCheck] = None
    aggregation: str = "best"
    report_paths: tuple[Path, ...] = field(default_factory=tuple)

    @property
    def passed(self) -> bool:
        scores_ok = all(v.passed for v in self.variants)
        bundle_ok = self.bundle is None or self.bundle.within_budget
        return scores_ok and bundle_ok

    def variant(self, name: str) -> VariantVerdict:
        for v in self.variants:
            if v.variant == name:
                return v
        raise KeyError(name)
