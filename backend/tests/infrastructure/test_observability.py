"""JSONFormatter and setup_logging."""

import json
import logging

from tracker.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord(
        "tracker.test", logging.WARNING, __file__, 1,
        "Cache clear failed", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_known_extras():
    line = JSONFormatter().format(
        _record(operation="createProject", cache_key="projects", unrelated="x"),
    )
    payload = json.loads(line)
    assert payload["level"] == "WARNING"
    assert payload["message"] == "Cache clear failed"
    assert payload["operation"] == "createProject"
    assert payload["cache_key"] == "projects"
    assert "unrelated" not in payload


def test_setup_logging_does_not_stack_handlers():
    setup_logging("DEBUG", "json")
    setup_logging("INFO", "text")
    ours = [
        h for h in logging.root.handlers if getattr(h, "_tracker_handler", False)
    ]
    assert len(ours) == 1
    logging.root.removeHandler(ours[0])
