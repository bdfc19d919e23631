# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Audit report loader.

Each audit job writes its reports into one shared directory, named so that
the variant and a per-container identifier are visible in the file name:

    reports/
    ├── anonymous-3f2a....report.json
    ├── anonymous-3f2a....report.html
    ├── anonymous-9c41....report.json
    ├── authenticated-17be....report.json
    └── ...

Only the JSON files are parsed. The HTML companion, when present, is
remembered so the summary can link to it.

A report that cannot be parsed, or that lacks a score for any goal category,
is a hard error.
"""

import json
import math
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any, Optional

from perfgate.evaluation.exceptions import ReportLoadError
from perfgate.evaluation.models import Report
from perfgate.logging.logger import get_logger

logger = get_logger(__name__)

_REPORT_SUFFIX = ".json"
_HTML_SUFFIX = ".html"


def infer_variant(path: Path, variants: Iterable[str]) -> Optional[str]:
    """
    Work out which variant a report belongs to from its file name.

    The variant is everything before the first "-". Files whose prefix is not
    a declared variant return None and are left alone by the loader.
    """
    prefix, sep, _ = path.name.partition("-")
    if not sep:
        return None
    return prefix if prefix in set(variants) else None


def _run_id(path: Path, variant: str) -> str:
    """The per-execution identifier between "<variant>-" and the first dot."""
    remainder = path.name[len(variant) + 1:]
    return remainder.split(".", 1)[0] or path.stem


def _coerce_score(raw: Any, category: str, path: Path, scale: float) -> float:
    # bool is an int subclass; a True score is a broken report, not 1 point.
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ReportLoadError(
            f"Score for '{category}' in {path.name} is not a number: {raw!r}"
        )
    value = float(raw) * scale
    if math.isnan(value) or not 0 <= value <= 100:
        raise ReportLoadError(
            f"Score for '{category}' in {path.name} is out of range: {raw!r}"
        )
    return round(value, 2)


def _extract_raw_scores(data: Mapping[str, Any], path: Path) -> tuple[dict[str, Any], float]:
    """
    Pull the category -> raw score mapping out of a parsed report.

    Three layouts are understood:
      - current Lighthouse: {"categories": {"performance": {"score": 0.93}}}, fractions
      - Lighthouse 2.x: {"reportCategories": [{"id": "performance", "score": 93}]}
      - flat: {"scores": {"performance": 93}}

    Returns the mapping and the multiplier that brings scores onto 0-100.
    """
    categories = data.get("categories")
    if isinstance(categories, Mapping):
        raw: dict[str, Any] = {}
        for name, entry in categories.items():
            if isinstance(entry, Mapping) and "score" in entry:
                raw[name] = entry["score"]
        return raw, 100.0

    report_categories = data.get("reportCategories")
    if isinstance(report_categories, list):
        raw = {}
        for entry in report_categories:
            if isinstance(entry, Mapping) and "id" in entry and "score" in entry:
                raw[str(entry["id"])] = entry["score"]
        return raw, 1.0

    scores = data.get("scores")
    if isinstance(scores, Mapping):
        return dict(scores), 1.0

    raise ReportLoadError(f"Unrecognized report layout in {path.name}: no category scores")


def parse_report(path: Path, variant: str, categories: Sequence[str]) -> Report:
    """
    Parse one JSON report and keep the scores for the goal categories.

    Categories in the report that are not goal categories are ignored.

    Raises:
        ReportLoadError: Unreadable file, invalid JSON, unknown layout, or a
            goal category with no usable score.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise ReportLoadError(f"Cannot read report {path}: {err}") from err

    try:
        data = json.loads(text)
    except ValueError as err:
        raise ReportLoadError(f"Invalid JSON in report {path}: {err}") from err

    if not isinstance(data, dict):
        raise ReportLoadError(
            f"Report {path.name} must contain a JSON object, got {type(data).__name__}"
        )

    raw_scores, scale = _extract_raw_scores(data, path)

    scores: dict[str, float] = {}
    for category in categories:
        if category not in raw_scores:
            raise ReportLoadError(
                f"Report {path.name} has no score for goal category '{category}'"
            )
        scores[category] = _coerce_score(raw_scores[category], category, path, scale)

    html_path = path.with_suffix(_HTML_SUFFIX)
    return Report(
        variant=variant,
        run_id=_run_id(path, variant),
        path=path,
        scores=scores,
        html_path=html_path if html_path.is_file() else None,
    )


def load_reports(
    directory: Path,
    categories: Sequence[str],
    variants: Sequence[str] = ("anonymous", "authenticated"),
) -> dict[str, tuple[Report, ...]]:
    """
    Load every report in a directory and group it by variant.

    Files are visited in sorted name order so the grouping (and therefore the
    "first" aggregation strategy) is deterministic. The returned dict follows
    the order of `variants`.

    Raises:
        ReportLoadError: Missing directory, any bad report, or a declared
            variant with no reports.
    """
    if not directory.is_dir():
        raise ReportLoadError(f"Report directory not found: {directory}")

    grouped: dict[str, list[Report]] = {variant: [] for variant in variants}

    for path in sorted(directory.iterdir()):
        if not path.is_file() or path.suffix != _REPORT_SUFFIX:
            continue

        variant = infer_variant(path, variants)
        if variant is None:
            logger.debug(
                "Skipping file that belongs to no declared variant",
                extra={"path": str(path)},
            )
            continue

        try:
            report = parse_report(path, variant, categories)
        except ReportLoadError as exc:
            logger.error(
                "Failed to load report",
                extra={"path": str(path), "error": str(exc)},
            )
            raise

        grouped[variant].append(report)
        logger.debug(
            "Loaded report",
            extra={"variant": variant, "run_id": report.run_id, "scores": report.scores},
        )

    empty = [variant for variant, reports in grouped.items() if not reports]
    if empty:
        raise ReportLoadError(
            f"No reports found in {directory} for variant(s): {', '.join(empty)}"
        )

    logger.info(
        "Reports loaded",
        extra={
            "directory": str(directory),
            "runs_per_variant": {variant: len(reports) for variant, reports in grouped.items()},
        },
    )

    return {variant: tuple(reports) for variant, reports in grouped.items()}
