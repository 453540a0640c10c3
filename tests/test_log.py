"""Tests for xkbconv.log — the TRACE level."""

from __future__ import annotations

import logging

from xkbconv.log import TRACE, level_for


class TestTraceLevel:

    def test_level_name(self):
        assert logging.getLevelName(TRACE) == "TRACE"

    def test_trace_below_debug(self):
        assert TRACE < logging.DEBUG

    def test_logger_trace(self, caplog):
        logger = logging.getLogger("xkbconv.test_log")
        with caplog.at_level(TRACE, logger="xkbconv.test_log"):
            logger.trace("keycode %d layout=%d", 30, 0)
        assert caplog.records[0].levelno == TRACE
        assert caplog.records[0].getMessage() == "keycode 30 layout=0"

    def test_trace_suppressed_at_debug(self, caplog):
        logger = logging.getLogger("xkbconv.test_log")
        with caplog.at_level(logging.DEBUG, logger="xkbconv.test_log"):
            logger.trace("hidden")
        assert caplog.records == []


class TestLevelFor:

    def test_default_warning(self):
        assert level_for() == logging.WARNING

    def test_debug(self):
        assert level_for(debug=True) == logging.DEBUG

    def test_trace_wins(self):
        assert level_for(debug=True, trace=True) == TRACE
