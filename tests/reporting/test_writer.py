# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the verdict writer.

Verifies that verdict.json is valid JSON with the pass flags spelled out,
and that summary.md holds exactly the rendered text.
"""

import json
from pathlib import Path

from perfgate.evaluation.models import BundleCheck, CategoryVerdict, VariantVerdict, Verdict
from perfgate.reporting.writer import verdict_to_dict, write_verdict


def _sample_verdict() -> Verdict:
    return Verdict(
        variants=(
            VariantVerdict(
                variant="anonymous",
                categories=(
                    CategoryVerdict("accessibility", 95, 96),
                    CategoryVerdict("performance", 90, 87),
                ),
                run_count=2,
            ),
        ),
        bundle=BundleCheck(path=Path("build/main.js"), actual_kb=123.456, max_kb=200),
        report_paths=(Path("reports/anonymous-a.report.json"),),
    )


class TestVerdictToDict:
    def test_flags_and_values(self) -> None:
        data = verdict_to_dict(_sample_verdict())

        assert data["passed"] is False
        anonymous = data["variants"]["anonymous"]
        assert anonymous["passed"] is False
        assert anonymous["run_count"] == 2
        assert anonymous["categories"]["performance"] == {
            "goal": 90, "actual": 87, "passed": False,
        }
        assert data["bundle"]["actual_kb"] == 123.46
        assert data["bundle"]["within_budget"] is True

    def test_no_bundle(self) -> None:
        verdict = Verdict(variants=_sample_verdict().variants)
        assert verdict_to_dict(verdict)["bundle"] is None


class TestWriteVerdict:
    def test_creates_output_directory(self, tmp_path: Path) -> None:
        output_dir = tmp_path / "results" / "perf"
        write_verdict(_sample_verdict(), "summary", output_dir)
        assert output_dir.is_dir()

    def test_writes_valid_json(self, tmp_path: Path) -> None:
        write_verdict(_sample_verdict(), "summary", tmp_path)
        data = json.loads((tmp_path / "verdict.json").read_text(encoding="utf-8"))
        assert data["passed"] is False
        assert data["aggregation"] == "best"
        assert data["reports"] == [str(Path("reports/anonymous-a.report.json"))]

    def test_writes_summary(self, tmp_path: Path) -> None:
        write_verdict(_sample_verdict(), "## ✗ Performance goals not met\n", tmp_path)
        text = (tmp_path / "summary.md").read_text(encoding="utf-8")
        assert text == "## ✗ Performance goals not met\n"
