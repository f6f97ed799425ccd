# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the structured JSON logger.

We verify:
  - output is valid JSON
  - all mandatory fields are present (ts, level, module, msg)
  - log levels filter correctly
  - extra context fields get merged into the JSON
"""

import io
import json
import logging
from pathlib import Path

import pytest

from clawbuild.logging.logger import get_logger


@pytest.fixture(autouse=True)
def _reset_loggers() -> None:
    """Clear test logger handlers so the handler-stacking guard doesn't leak between tests."""
    yield  # type: ignore[misc]
    for name in list(logging.Logger.manager.loggerDict):
        if name.startswith("clawbuild.test"):
            logging.getLogger(name).handlers.clear()


class TestJsonOutput:
    def test_output_is_valid_json(self) -> None:
        stream = io.StringIO()
        logger = get_logger("clawbuild.test.json", log_level="INFO", stream=stream)
        logger.info("hello")
        assert isinstance(json.loads(stream.getvalue().strip()), dict)

    def test_mandatory_fields_are_present(self) -> None:
        stream = io.StringIO()
        logger = get_logger("clawbuild.test.fields", log_level="INFO", stream=stream)
        logger.info("test message")

        parsed = json.loads(stream.getvalue().strip())
        assert "ts" in parsed
        assert parsed["level"] == "INFO"
        assert parsed["module"] == "clawbuild.test.fields"
        assert parsed["msg"] == "test message"

    def test_extra_fields_are_included(self) -> None:
        stream = io.StringIO()
        logger = get_logger("clawbuild.test.extra", log_level="DEBUG", stream=stream)
        logger.debug("invoking", extra={"backend": "metal", "exit_status": 0})

        parsed = json.loads(stream.getvalue().strip())
        assert parsed["backend"] == "metal"
        assert parsed["exit_status"] == 0

    def test_defaults_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("clawbuild.test.stderr", log_level="WARNING")
        logger.warning("careful")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert json.loads(captured.err.strip())["msg"] == "careful"


class TestLevels:
    def test_below_level_is_dropped(self) -> None:
        stream = io.StringIO()
        logger = get_logger("clawbuild.test.level", log_level="WARNING", stream=stream)
        logger.info("quiet")
        assert stream.getvalue() == ""

    def test_repeat_call_updates_level_without_stacking(self) -> None:
        stream = io.StringIO()
        logger = get_logger("clawbuild.test.repeat", log_level="WARNING", stream=stream)
        same = get_logger("clawbuild.test.repeat", log_level="DEBUG")
        assert same is logger
        assert len(logger.handlers) == 1
        logger.debug("now visible")
        assert "now visible" in stream.getvalue()

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError):
            get_logger("clawbuild.test.bad", log_level="LOUD")


class TestFileOutput:
    def test_writes_to_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "build.log"
        logger = get_logger(
            "clawbuild.test.file", log_level="INFO", log_file=log_file, stream=io.StringIO()
        )
        logger.info("to disk")
        for handler in logger.handlers:
            handler.flush()
        assert json.loads(log_file.read_text(encoding="utf-8").strip())["msg"] == "to disk"
