"""Tests for chalkcore.logging module."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterator
from unittest.mock import patch

import pytest

from chalkcore import (
    AuthorizationConfig,
    AuthorizationFormatter,
    LogLevel,
    Subject,
    get_subject_logger,
    safe_preview,
    setup_logging,
)


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg: str = "Test message") -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestSafePreview:
    """Tests for safe_preview function."""

    def test_none_value(self) -> None:
        """Test that None returns empty string."""
        assert safe_preview(None) == ""

    def test_string_with_whitespace(self) -> None:
        """Test that whitespace is normalized."""
        assert safe_preview("hello\n\tworld  test") == "hello world test"

    def test_string_truncation(self) -> None:
        """Test that long strings are truncated."""
        result = safe_preview("a" * 300, limit=100)
        assert len(result) == 100
        assert result.endswith("…")

    def test_dict_value(self) -> None:
        """Test that dicts are converted to JSON."""
        assert safe_preview({"post": 6}) == '{"post": 6}'


class TestAuthorizationFormatter:
    """Tests for AuthorizationFormatter."""

    def test_json_format(self) -> None:
        """JSON output includes subject_id and extras."""
        record = _record()
        record.subject_id = "u1"
        record.element = "post"

        data = json.loads(AuthorizationFormatter(json_format=True).format(record))
        assert data["level"] == "INFO"
        assert data["message"] == "Test message"
        assert data["subject_id"] == "u1"
        assert data["element"] == "post"

    def test_plain_format(self) -> None:
        """Plain text output includes the subject id."""
        record = _record()
        record.subject_id = "u1"

        result = AuthorizationFormatter(json_format=False).format(record)
        assert "INFO" in result
        assert "Test message" in result
        assert "subject_id=u1" in result
        assert not result.startswith("{")


class TestSubjectLogger:
    """Tests for the subject logger adapter."""

    def test_bound_subject_id(self, caplog: pytest.LogCaptureFixture) -> None:
        """Adapter default subject id lands on the record."""
        logger = get_subject_logger("test", subject_id="u1")
        with caplog.at_level(logging.INFO):
            logger.info("Test message")
        assert caplog.records[-1].subject_id == "u1"

    def test_subject_kwarg(self, caplog: pytest.LogCaptureFixture) -> None:
        """A subject passed per call supplies the id."""
        logger = get_subject_logger("test")
        with caplog.at_level(logging.INFO):
            logger.info("Granted", subject=Subject(id="u2"))
        assert caplog.records[-1].subject_id == "u2"

    def test_without_subject(self, caplog: pytest.LogCaptureFixture) -> None:
        """No subject means no subject_id attribute."""
        logger = get_subject_logger("test")
        with caplog.at_level(logging.INFO):
            logger.info("Test message")
        assert not hasattr(caplog.records[-1], "subject_id")


@pytest.mark.usefixtures("restore_root_logger")
class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_with_config(self) -> None:
        """Test logging setup with AuthorizationConfig."""
        setup_logging(config=AuthorizationConfig(log_level=LogLevel.DEBUG), json_format=False)
        assert logging.getLogger().level == logging.DEBUG

    @patch.dict(os.environ, {"LOG_LEVEL": "WARNING"}, clear=True)
    def test_setup_with_env(self) -> None:
        """Test logging setup loading from environment."""
        setup_logging(json_format=False)
        assert logging.getLogger().level == logging.WARNING

    def test_json_from_config(self, capsys: pytest.CaptureFixture) -> None:
        """log_json selects the JSON formatter."""
        setup_logging(config=AuthorizationConfig(log_json=True))
        logging.getLogger("test").info("Test message")

        data = json.loads(capsys.readouterr().err.strip())
        assert data["message"] == "Test message"
        assert data["logger"] == "test"

    def test_plain_format(self, capsys: pytest.CaptureFixture) -> None:
        """Test plain text format output."""
        setup_logging(config=AuthorizationConfig(), json_format=False)
        logging.getLogger("test").info("Test message")

        stderr_output = capsys.readouterr().err.strip()
        assert "Test message" in stderr_output
        assert not stderr_output.startswith("{")
