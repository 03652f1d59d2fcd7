"""Tests for boardz/log.py: process logging setup."""

from __future__ import annotations

import json
import logging

import pytest

from boardz.log import JsonFormatter, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_formatter_emits_one_object():
    record = logging.LogRecord("boardz.tests", logging.WARNING, __file__, 1, "Step %s rejected", (2,), None)
    entry = json.loads(JsonFormatter("boardz-onboarding").format(record))
    assert entry["severity"] == "WARNING"
    assert entry["service"] == "boardz-onboarding"
    assert entry["message"] == "Step 2 rejected"


def test_setup_logging_replaces_its_own_handler_only():
    setup_logging("boardz-onboarding", "DEBUG")
    setup_logging("boardz-onboarding", "INFO", environment="production")

    ours = [h for h in logging.getLogger().handlers if getattr(h, "_boardz_handler", False)]
    assert len(ours) == 1
    assert isinstance(ours[0].formatter, JsonFormatter)
    assert logging.getLogger().level == logging.INFO
