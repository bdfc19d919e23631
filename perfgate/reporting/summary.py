# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Human-readable summary of a verdict, formatted as GitHub-flavoured Markdown.

The same text is printed to the CI log, written to summary.md and posted as
the pull-request comment. A missed goal gets a per-category table. A run
that could not be judged gets render_error_summary and no table at all.
"""

from collections.abc import Mapping, Sequence
from typing import Optional

from perfgate.evaluation.models import BundleCheck, Report, VariantVerdict, Verdict

_PASS = "✓ pass"
_FAIL = "✗ FAIL"


def _fmt_score(value: float) -> str:
    return f"{value:g}"


def build_report_links(
    reports: Mapping[str, Sequence[Report]],
    base_url: Optional[str] = None,
) -> dict[str, str]:
    """
    One link per audit run, keyed by "<variant>-<run_id>".

    Links point at the HTML report when the audit tool wrote one, otherwise
    at the JSON. Without a base URL the bare file name is used, which is still
    useful next to the uploaded artifacts.
    """
    links: dict[str, str] = {}
    for variant, batch in reports.items():
        for report in batch:
            target = report.html_path or report.path
            href = target.name
            if base_url:
                href = f"{base_url.rstrip('/')}/{target.name}"
            links[f"{variant}-{report.run_id}"] = href
    return links


def _render_variant(verdict: VariantVerdict, strategy: str) -> list[str]:
    runs = "run" if verdict.run_count == 1 else "runs"
    lines = [
        f"### {verdict.variant} ({strategy} of {verdict.run_count} {runs})",
        "",
        "| Category | Goal | Actual | Result |",
        "| --- | ---: | ---: | --- |",
    ]
    for c in verdict.categories:
        result = _PASS if c.passed else _FAIL
        lines.append(
            f"| {c.category} | {_fmt_score(c.goal)} | {_fmt_score(c.actual)} | {result} |"
        )
    lines.append("")
    return lines


def _render_bundle(bundle: BundleCheck) -> list[str]:
    result = _PASS if bundle.within_budget else _FAIL
    return [
        f"**Bundle size** ({bundle.category}): `{bundle.path.name}` is "
        f"{bundle.actual_kb:.1f} KB, budget {_fmt_score(bundle.max_kb)} KB: {result}",
        "",
    ]


def render_summary(verdict: Verdict, report_links: Mapping[str, str]) -> str:
    """
    Render the review comment for a completed evaluation.

    Contents, top to bottom: overall status, one table per variant with goal
    vs actual per category, the bundle line when a budget is declared, and
    links to every full report.
    """
    if verdict.passed:
        header = "## ✓ Performance goals met"
    else:
        header = "## ✗ Performance goals not met"

    lines: list[str] = [header, ""]

    if not verdict.passed:
        failures: list[str] = []
        for v in verdict.variants:
            failures.extend(f"{v.variant}/{category}" for category in v.failed_categories)
        if verdict.bundle is not None and not verdict.bundle.within_budget:
            failures.append("bundle size")
        lines.extend([f"Goals missed: {', '.join(failures)}", ""])

    for variant_verdict in verdict.variants:
        lines.extend(_render_variant(variant_verdict, verdict.aggregation))

    if verdict.bundle is not None:
        lines.extend(_render_bundle(verdict.bundle))

    if report_links:
        lines.extend(["### Full reports", ""])
        for name, href in sorted(report_links.items()):
            lines.append(f"- [{name}]({href})")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def render_error_summary(error: BaseException) -> str:
    """
    Render the comment for a run that could not be evaluated at all.

    The scores were never compared, so the text names the error instead of
    reporting a failed goal.
    """
    return "\n".join([
        "## ⚠ Performance check could not run",
        "",
        "This is a configuration or data error, not a missed performance goal.",
        "",
        "```",
        f"{type(error).__name__}: {error}",
        "```",
        "",
    ])
