"""
Unit tests for the logging setup.
"""

import json
import logging
from datetime import date

from clinic.core.logging_config import (
    ConsoleFormatter,
    JSONFormatter,
    get_logger,
    setup_logging,
)


def _record(**extra):
    record = logging.LogRecord(
        name="clinic.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Patient created",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_context():
    payload = json.loads(JSONFormatter().format(_record(context={"patient_id": 3})))

    assert payload["message"] == "Patient created"
    assert payload["level"] == "INFO"
    assert payload["context"] == {"patient_id": 3}


def test_json_formatter_serializes_unknown_types():
    payload = json.loads(JSONFormatter().format(_record(context={"day": date(2025, 1, 2)})))

    assert payload["context"]["day"] == "2025-01-02"


def test_console_formatter_leaves_record_untouched():
    record = _record()

    ConsoleFormatter("%(levelname)s %(message)s").format(record)

    assert record.levelname == "INFO"


def test_file_handlers_write_json(tmp_path):
    setup_logging(log_level="INFO", log_to_file=True, log_dir=tmp_path)
    try:
        get_logger("clinic.test").error("Storage down", extra={"context": {"op": "x"}})
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = (tmp_path / "clinic_errors.log").read_text().strip().splitlines()
        assert json.loads(lines[-1])["context"] == {"op": "x"}
        assert (tmp_path / "clinic.log").exists()
    finally:
        setup_logging(log_level="INFO")
