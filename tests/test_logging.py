"""
Tests for logging formatters and the learning summary line.
"""

import json
import logging

from utils.logging import ConsoleFormatter, JSONFormatter, log_learning_outcome


def make_record(msg="hello", level=logging.INFO, **extra):
    record = logging.LogRecord("app.test", level, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    
    def test_context_fields_are_top_level(self):
        record = make_record(user_id="user-1", transcript_id="t-1", attempt=2)
        
        payload = json.loads(JSONFormatter().format(record))
        
        assert payload["msg"] == "hello"
        assert payload["level"] == "INFO"
        assert payload["user_id"] == "user-1"
        assert payload["transcript_id"] == "t-1"
        assert payload["extra"] == {"attempt": 2}
    
    def test_no_extra_key_without_extras(self):
        payload = json.loads(JSONFormatter().format(make_record()))
        assert "extra" not in payload


class TestConsoleFormatter:
    
    def test_does_not_mutate_record(self):
        record = make_record(level=logging.WARNING)
        
        line = ConsoleFormatter(fmt="%(levelname)s %(message)s").format(record)
        
        assert "WARNING" in line
        assert "hello" in line
        assert record.levelname == "WARNING"


class TestLearningOutcome:
    
    def test_info_when_all_stored(self, caplog):
        with caplog.at_level(logging.INFO, logger="personalization"):
            log_learning_outcome("user-1", "t-1", emitted=2, stored=2, failures=0)
        
        assert caplog.records[-1].levelno == logging.INFO
        assert "stored=2" in caplog.records[-1].getMessage()
    
    def test_warning_on_failures(self, caplog):
        with caplog.at_level(logging.INFO, logger="personalization"):
            log_learning_outcome("user-1", "t-1", emitted=2, stored=1, failures=1)
        
        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert "failed=1" in record.getMessage()
        assert record.user_id == "user-1"
