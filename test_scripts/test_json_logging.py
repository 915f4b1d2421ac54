#!/usr/bin/env python3
"""Verify the JSON logging configuration drops empty fields and keeps extras."""

import json
import logging

from app.config import CustomJsonFormatter, setup_json_logging


def _format(extra=None, msg="cab.decision.recorded"):
    formatter = CustomJsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(change_id)s %(decision)s %(warning)s"
    )
    record = logging.LogRecord(
        name="app.services.change_workflow",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in (extra or {}).items():
        setattr(record, key, value)
    return json.loads(formatter.format(record))


def test_none_fields_are_dropped():
    payload = _format()
    assert payload["message"] == "cab.decision.recorded"
    assert payload["levelname"] == "INFO"
    assert "change_id" not in payload
    assert "decision" not in payload
    assert "warning" not in payload


def test_extra_fields_are_kept():
    payload = _format({"change_id": 7, "decision": "approve"})
    assert payload["change_id"] == 7
    assert payload["decision"] == "approve"
    assert "warning" not in payload


def test_partial_fields():
    payload = _format({"warning": "Benefit: no active config for costSavings; factor skipped."}, msg="scoring.warning")
    assert payload["message"] == "scoring.warning"
    assert payload["warning"].startswith("Benefit:")
    assert "change_id" not in payload


def test_setup_installs_single_handler_on_app_logger():
    setup_json_logging(logging.DEBUG)
    setup_json_logging(logging.DEBUG)
    root = logging.getLogger("app")
    try:
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, CustomJsonFormatter)
        assert root.level == logging.DEBUG
        assert root.propagate is False
    finally:
        root.handlers = []
        root.propagate = True
        root.setLevel(logging.NOTSET)
