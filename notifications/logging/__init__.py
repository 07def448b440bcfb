"""Logging utilities for the notification service."""

from notifications.logging.config import setup_logging
from notifications.logging.context import (
    get_request_id,
    get_scheduler_rule,
    scheduler_rule_context,
    set_request_id,
)

__all__ = [
    "get_request_id",
    "get_scheduler_rule",
    "scheduler_rule_context",
    "set_request_id",
    "setup_logging",
]
