# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for perfgate tests.

Fixtures here are available to every test file automatically.
Only fixtures that several test modules share live here.
"""

import json
import logging
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

ReportWriter = Callable[..., Path]


@pytest.fixture(autouse=True)
def _reset_perfgate_logger() -> None:
    """Drop handlers between tests so each test's capture streams are picked up fresh."""
    yield  # type: ignore[misc]
    root = logging.getLogger("perfgate")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


@pytest.fixture()
def write_report(tmp_path: Path) -> ReportWriter:
    """
    Factory that writes a Lighthouse-shaped JSON report.

    Scores are given on the 0-100 scale and stored as Lighthouse fractions,
    so the loader's scaling is exercised by every test that uses this.
    """
    reports_dir = tmp_path / "reports"
    reports_dir.mkdir(exist_ok=True)

    def _write(name: str, scores: dict[str, float], html: bool = False) -> Path:
        payload = {
            "lighthouseVersion": "4.1.0",
            "finalUrl": "https://staging.example.com/",
            "categories": {
                category: {"id": category, "title": category, "score": value / 100}
                for category, value in scores.items()
            },
        }
        path = reports_dir / f"{name}.report.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        if html:
            path.with_suffix(".html").write_text("<html></html>", encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def reports_dir(tmp_path: Path) -> Path:
    path = tmp_path / "reports"
    path.mkdir(exist_ok=True)
    return path


@pytest.fixture()
def bundle_dir(tmp_path: Path) -> Path:
    """A build output directory with a 150 KB main bundle and a small vendor chunk."""
    path = tmp_path / "build" / "static" / "js"
    path.mkdir(parents=True)
    (path / "main.8c2e1f.js").write_bytes(b"x" * 150 * 1024)
    (path / "vendor.11aa22.js").write_bytes(b"x" * 10 * 1024)
    return path


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """
    A minimal valid config: global section plus two score goals.

    Tests that need specific config values should write their own files.
    """
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          project_name: "perfgate-test"
          log_level: "DEBUG"
        goals:
          scores:
            performance: 90
            accessibility: 95
    """)
    config_file = tmp_path / "perfgate.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """A config file that's valid YAML but fails schema validation (no goals)."""
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
    """)
    config_file = tmp_path / "invalid_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    """A file that isn't valid YAML at all."""
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file
