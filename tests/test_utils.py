"""
Tests for logging setup, API usage tracking and payload validators.
"""

import json
import logging
import sys

import pytest

from matchday.utils import (
    APIRequestLogger,
    APITracker,
    LogContext,
    SecretFilter,
    TypeValidationError,
    ValidationError,
    read_field,
    read_list,
    read_object,
    setup_logging,
)
from matchday.utils.logging_config import ConsoleFormatter, JSONFormatter


@pytest.fixture
def restore_root_logger():
    """setup_logging reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    LogContext.clear()
    SecretFilter.clear()


def make_record(message="hello", level=logging.INFO, **extra):
    record = logging.LogRecord("matchday.test", level, __file__, 10, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestAPITracker:

    def test_counts(self):
        tracker = APITracker()
        tracker.record_request('/competitions', response_status=200, response_time_ms=12.0)
        tracker.record_request('/competitions', response_status=429, error_type='RateLimited')
        count = tracker.record_request('/teams/57', response_status=200)

        stats = tracker.get_session_stats()

        assert count == 3
        assert tracker.total_requests == 3
        assert tracker.failed_requests == 1
        assert stats['source'] == 'football_data'
        assert stats['requests_by_endpoint'] == {'/competitions': 2, '/teams/57': 1}
        assert stats['failures_by_type'] == {'RateLimited': 1}

    def test_log_is_bounded(self):
        tracker = APITracker(max_log_entries=3)
        for index in range(5):
            tracker.record_request(f'/persons/{index}')

        recent = tracker.recent_requests(limit=10)

        assert [entry['endpoint'] for entry in recent] == ['/persons/2', '/persons/3', '/persons/4']
        assert tracker.recent_requests(limit=1)[0]['endpoint'] == '/persons/4'


class TestLogging:

    def test_json_formatter_includes_extra(self):
        record = make_record(endpoint='/competitions', response_status=200)

        data = json.loads(JSONFormatter().format(record))

        assert data['level'] == 'INFO'
        assert data['message'] == 'hello'
        assert data['extra']['endpoint'] == '/competitions'

    def test_json_formatter_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("t", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())

        data = json.loads(JSONFormatter(include_extra=False).format(record))

        assert data['exception']['type'] == 'ValueError'
        assert 'extra' not in data

    def test_console_formatter(self):
        line = ConsoleFormatter().format(make_record(level=logging.WARNING))
        assert "WARNING" in line
        assert "hello" in line

    def test_setup_logging_writes_files(self, tmp_path, restore_root_logger):
        root = setup_logging(level="DEBUG", json_logs=True, log_dir=str(tmp_path), enable_console=False)
        LogContext.set(command='schedule')

        logging.getLogger("matchday.test").error("something broke")
        for handler in root.handlers:
            handler.flush()

        main_log = (tmp_path / "matchday.log").read_text(encoding="utf-8").strip().splitlines()
        entry = json.loads(main_log[-1])
        assert entry['message'] == "something broke"
        assert entry['extra']['command'] == 'schedule'
        assert (tmp_path / "errors.log").read_text(encoding="utf-8")

    def test_setup_logging_without_files(self, tmp_path, restore_root_logger):
        root = setup_logging(level="WARNING", log_dir=str(tmp_path), enable_file=False)

        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert not (tmp_path / "matchday.log").exists()

    def test_api_request_logger(self, caplog):
        api_logger = APIRequestLogger("football_data")

        with caplog.at_level(logging.DEBUG, logger="matchday.api.football_data"):
            api_logger.log_request('/competitions', response_status=200, response_time_ms=5.0)
            api_logger.log_request('/matches', response_status=None, error="InvalidResponse: timeout")

        assert caplog.records[0].levelno == logging.DEBUG
        assert caplog.records[0].endpoint == '/competitions'
        assert caplog.records[1].levelno == logging.WARNING
        assert "InvalidResponse" in caplog.records[1].getMessage()


class TestValidators:

    def test_read_field(self):
        data = {'id': 7, 'name': None, 'flag': True}

        assert read_field(data, 'id', int, required=True) == 7
        assert read_field(data, 'name', str, default="x") == "x"
        assert read_field(data, 'missing', str) is None

    def test_required_missing(self):
        with pytest.raises(ValidationError) as exc_info:
            read_field({}, 'id', int, required=True)
        assert exc_info.value.field == 'id'

    def test_bool_is_not_int(self):
        with pytest.raises(TypeValidationError):
            read_field({'id': True}, 'id', int)

    def test_int_accepted_as_float(self):
        assert read_field({'value': 3}, 'value', float) == 3

    def test_read_object_requires_mapping(self):
        with pytest.raises(TypeValidationError):
            read_object({'area': "England"}, 'area', dict)

    def test_read_list(self):
        assert read_list({'items': [{'a': 1}]}, 'items', lambda d: d['a']) == (1,)
        assert read_list({}, 'items', dict) is None
        with pytest.raises(TypeValidationError):
            read_list({'items': {}}, 'items', dict)


class TestSecretFilter:
    """Registered API keys never reach a handler."""

    def test_message_and_extra_redacted(self, restore_root_logger):
        SecretFilter.register("abcdef123456")
        record = make_record("using key abcdef123456", token="abcdef123456")

        assert SecretFilter().filter(record)

        assert record.getMessage() == "using key ***"
        assert record.token == "***"

    def test_formatting_args_applied_before_redaction(self, restore_root_logger):
        SecretFilter.register("abcdef123456")
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "key=%s", ("abcdef123456",), None)

        SecretFilter().filter(record)

        assert record.getMessage() == "key=***"

    def test_short_values_ignored(self, restore_root_logger):
        SecretFilter.register("abc")
        SecretFilter.register(None)

        assert SecretFilter.redact("abc") == "abc"

    def test_file_log_is_redacted(self, tmp_path, restore_root_logger):
        SecretFilter.register("supersecretkey")
        root = setup_logging(level="INFO", log_dir=str(tmp_path), enable_console=False)

        logging.getLogger("matchday.test").info("header X-Auth-Token: supersecretkey")
        for handler in root.handlers:
            handler.flush()

        text = (tmp_path / "matchday.log").read_text(encoding="utf-8")
        assert "supersecretkey" not in text
        assert "X-Auth-Token: ***" in text
