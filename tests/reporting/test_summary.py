# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the rendered review comment.

A reader should be able to tell at a glance whether goals were met, which
ones were not, and whether the run errored instead.
"""

from pathlib import Path

from perfgate.evaluation.exceptions import ReportLoadError
from perfgate.evaluation.models import (
    BundleCheck,
    CategoryVerdict,
    Report,
    VariantVerdict,
    Verdict,
)
from perfgate.reporting.summary import build_report_links, render_error_summary, render_summary


def _verdict(performance: float = 93, bundle_kb: float = 150) -> Verdict:
    return Verdict(
        variants=(
            VariantVerdict(
                variant="anonymous",
                categories=(
                    CategoryVerdict("accessibility", 95, 96),
                    CategoryVerdict("performance", 90, performance),
                ),
                run_count=2,
            ),
        ),
        bundle=BundleCheck(path=Path("build/main.abc.js"), actual_kb=bundle_kb, max_kb=200),
    )


class TestRenderSummary:
    def test_passing_summary(self) -> None:
        text = render_summary(_verdict(), {})
        assert text.startswith("## ✓ Performance goals met")
        assert "### anonymous (best of 2 runs)" in text
        assert "| performance | 90 | 93 | ✓ pass |" in text
        assert "Goals missed" not in text

    def test_failing_category_is_listed(self) -> None:
        text = render_summary(_verdict(performance=87), {})
        assert "## ✗ Performance goals not met" in text
        assert "Goals missed: anonymous/performance" in text
        assert "| performance | 90 | 87 | ✗ FAIL |" in text

    def test_bundle_line(self) -> None:
        text = render_summary(_verdict(bundle_kb=210), {})
        assert "`main.abc.js` is 210.0 KB, budget 200 KB: ✗ FAIL" in text
        assert "Goals missed: bundle size" in text

    def test_links_are_listed_sorted(self) -> None:
        links = {"anonymous-b": "https://ci/b.html", "anonymous-a": "https://ci/a.html"}
        text = render_summary(_verdict(), links)
        assert "### Full reports" in text
        assert text.index("[anonymous-a]") < text.index("[anonymous-b]")
        assert "- [anonymous-a](https://ci/a.html)" in text

    def test_no_bundle_section_without_budget(self) -> None:
        verdict = Verdict(variants=_verdict().variants)
        assert "Bundle size" not in render_summary(verdict, {})


class TestRenderErrorSummary:
    def test_error_is_not_a_goal_failure(self) -> None:
        text = render_error_summary(ReportLoadError("No reports found"))
        assert "could not run" in text
        assert "ReportLoadError: No reports found" in text
        assert "not met" not in text


class TestBuildReportLinks:
    def test_prefers_html_and_joins_base_url(self) -> None:
        reports = {
            "anonymous": (
                Report(
                    variant="anonymous",
                    run_id="abc",
                    path=Path("reports/anonymous-abc.report.json"),
                    scores={},
                    html_path=Path("reports/anonymous-abc.report.html"),
                ),
            ),
        }
        links = build_report_links(reports, "https://artifacts.example.com/0/reports/")
        assert links == {
            "anonymous-abc": "https://artifacts.example.com/0/reports/anonymous-abc.report.html",
        }

    def test_falls_back_to_json_name(self) -> None:
        reports = {
            "authenticated": (
                Report(
                    variant="authenticated",
                    run_id="x1",
                    path=Path("reports/authenticated-x1.report.json"),
                    scores={},
                ),
            ),
        }
        assert build_report_links(reports) == {
            "authenticated-x1": "authenticated-x1.report.json",
        }
