"""Thread-local logging context: HTTP request id and running scheduler rule."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager

_log_context = threading.local()


def set_request_id(request_id: str) -> None:
    """Store the request ID for the current thread."""
    _log_context.request_id = request_id


def get_request_id() -> str | None:
    """Return the current thread's request ID, if any."""
    return getattr(_log_context, "request_id", None)


def clear_request_id() -> None:
    """Forget the current thread's request ID."""
    if hasattr(_log_context, "request_id"):
        delattr(_log_context, "request_id")


def get_scheduler_rule() -> str | None:
    """Return the name of the scheduler rule running on this thread, if any."""
    return getattr(_log_context, "scheduler_rule", None)


@contextmanager
def scheduler_rule_context(rule_name: str) -> Iterator[None]:
    """Tag every log line emitted inside the block with ``scheduler_rule``.

    Scheduler ticks run on APScheduler worker threads, so the value is kept
    per thread and removed when the tick ends.

    Args:
        rule_name: Name of the trigger rule being executed.
    """
    _log_context.scheduler_rule = rule_name
    try:
        yield
    finally:
        if hasattr(_log_context, "scheduler_rule"):
            delattr(_log_context, "scheduler_rule")
