# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the structured JSON logger.

We verify:
  - output is valid JSON on stderr, stdout stays clean
  - all mandatory fields are present (ts, level, module, msg)
  - log levels filter correctly and can be changed after loggers exist
  - extra context fields get merged into the JSON
"""

import json
from pathlib import Path

import pytest

from perfgate.logging.logger import configure_logging, get_logger


class TestJsonOutput:
    def test_output_is_valid_json_on_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("INFO")
        get_logger("perfgate.test.json").info("hello")
        captured = capsys.readouterr()

        assert captured.out == ""
        parsed = json.loads(captured.err.strip())
        assert isinstance(parsed, dict)

    def test_mandatory_fields_are_present(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("INFO")
        get_logger("perfgate.test.fields").info("test message")
        parsed = json.loads(capsys.readouterr().err.strip())

        assert "ts" in parsed
        assert parsed["level"] == "INFO"
        assert parsed["module"] == "perfgate.test.fields"
        assert parsed["msg"] == "test message"

    def test_extra_fields_are_included(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("DEBUG")
        get_logger("perfgate.test.extra").info(
            "variant judged", extra={"variant": "anonymous", "passed": False}
        )
        parsed = json.loads(capsys.readouterr().err.strip())

        assert parsed["variant"] == "anonymous"
        assert parsed["passed"] is False

    def test_foreign_names_are_nested(self) -> None:
        assert get_logger("scripts.ci").name == "perfgate.scripts.ci"


class TestLogLevelFiltering:
    def test_debug_messages_hidden_at_info_level(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging("INFO")
        get_logger("perfgate.test.level_filter").debug("this should not appear")
        assert capsys.readouterr().err.strip() == ""

    def test_level_applies_to_existing_loggers(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        logger = get_logger("perfgate.test.late_level")
        configure_logging("DEBUG")
        logger.debug("now visible")
        assert "now visible" in capsys.readouterr().err

    def test_reconfiguring_does_not_duplicate_output(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging("INFO")
        configure_logging("INFO")
        get_logger("perfgate.test.once").info("once")
        assert len(capsys.readouterr().err.strip().splitlines()) == 1


class TestFileOutput:
    def test_logs_are_written_to_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "perfgate.log"
        configure_logging("INFO", log_file=log_file)
        get_logger("perfgate.test.file_output").info("file log test")

        content = log_file.read_text(encoding="utf-8")
        parsed = json.loads(content.strip())
        assert parsed["msg"] == "file log test"


class TestInvalidLogLevel:
    def test_invalid_level_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging("LOUD")
