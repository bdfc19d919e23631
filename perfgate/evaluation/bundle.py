# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
JS bundle size check.

The built output directory is searched (recursively, in sorted order) for
files whose name matches the configured pattern. The pattern is applied with
re.search, so "main\\.[0-9a-f]+\\.js" finds "main.8c2e1f.js" without anchors.

Source maps (*.map) are never candidates, so "main\\." does not pick up
"main.8c2e1f.js.map". More than one remaining match is ambiguous and fails
the check instead of guessing which file ships.
"""

import re
from pathlib import Path

from perfgate.evaluation.exceptions import ArtifactNotFoundError
from perfgate.evaluation.models import BundleCheck
from perfgate.logging.logger import get_logger

logger = get_logger(__name__)

BYTES_PER_KB = 1024

_SOURCE_MAP_SUFFIX = ".map"


def find_artifacts(artifact_directory: Path, name_pattern: str) -> list[Path]:
    """Every non-source-map file under the directory whose name matches, sorted."""
    regex = re.compile(name_pattern)
    return [
        path
        for path in sorted(artifact_directory.rglob("*"))
        if path.is_file()
        and path.suffix != _SOURCE_MAP_SUFFIX
        and regex.search(path.name)
    ]


def check_bundle_size(
    artifact_directory: Path,
    max_kb: float,
    name_pattern: str,
    category: str = "performance",
) -> BundleCheck:
    """
    Measure the bundle matching `name_pattern` and compare it to `max_kb`.

    Returns a BundleCheck whose `within_budget` is True when the size is at
    or under the budget. An oversized bundle is a normal result, not an error.

    Raises:
        ArtifactNotFoundError: The directory is missing, nothing matches, or
            several files match.
    """
    if not artifact_directory.is_dir():
        raise ArtifactNotFoundError(f"Artifact directory not found: {artifact_directory}")

    matches = find_artifacts(artifact_directory, name_pattern)
    if not matches:
        raise ArtifactNotFoundError(
            f"No file in {artifact_directory} matches bundle pattern '{name_pattern}'"
        )

    if len(matches) > 1:
        names = ", ".join(str(p.relative_to(artifact_directory)) for p in matches)
        raise ArtifactNotFoundError(
            f"Bundle pattern '{name_pattern}' is ambiguous in {artifact_directory}: "
            f"{len(matches)} files match ({names})"
        )

    bundle_path = matches[0]
    actual_kb = bundle_path.stat().st_size / BYTES_PER_KB

    check = BundleCheck(
        path=bundle_path,
        actual_kb=actual_kb,
        max_kb=max_kb,
        category=category,
    )

    logger.info(
        "Bundle size checked",
        extra={
            "path": str(bundle_path),
            "actual_kb": actual_kb,
            "max_kb": max_kb,
            "within_budget": check.within_budget,
        },
    )

    return check
