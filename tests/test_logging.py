# tests/test_logging.py
"""
Unit tests for logger naming.
"""

import logging

from flowsync.utils.logger import get_logger


def test_module_loggers_hang_under_root():
    assert get_logger("store").name == "flowsync.store"
    assert get_logger("flowsync.services.graph_store").name == "flowsync.services.graph_store"
    assert get_logger().name == "flowsync"


def test_single_handler_on_root():
    assert len(logging.getLogger("flowsync").handlers) == 1
