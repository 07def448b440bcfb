"""APScheduler wiring for the trigger rules."""

from collections.abc import Callable
from typing import Any

from django.conf import settings
from django.db import close_old_connections

import structlog
from apscheduler.job import Job
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from notifications.logging import scheduler_rule_context
from notifications.scheduler.trigger_rules import TriggerRules
from notifications.timeutils import notification_tz

logger = structlog.get_logger(__name__)

JOB_DEFAULTS = {
    "coalesce": True,
    "max_instances": 1,
    "misfire_grace_time": 60,
}

# Cron setting key -> TriggerRules method.
RULES = {
    "pending_sweep": "pending_sweep",
    "daily_goal_check": "daily_goal_check",
    "weekly_digest": "weekly_digest",
    "inactivity_check": "inactivity_check",
    "history_retention": "history_retention",
    "throttle_retention": "throttle_retention",
}


class NotificationScheduler:
    """Owns the background scheduler and the handles of every rule job.

    With ``max_instances=1`` a tick that would overlap the previous run of the
    same rule is skipped; the next tick picks the work up.
    """

    def __init__(
        self,
        backend: BackgroundScheduler | None = None,
        rules: TriggerRules | None = None,
        schedule: dict[str, str] | None = None,
    ) -> None:
        self.backend = backend or BackgroundScheduler(
            job_defaults=JOB_DEFAULTS, timezone=notification_tz()
        )
        self.rules = rules or TriggerRules()
        self.schedule = schedule if schedule is not None else settings.NOTIFICATION_SCHEDULE
        self.jobs: list[Job] = []

    @property
    def running(self) -> bool:
        return bool(self.backend.running)

    def _rule(self, name: str) -> Callable[[], Any]:
        try:
            return getattr(self.rules, RULES[name])
        except KeyError:
            raise ValueError(f"Unknown scheduler rule '{name}'") from None

    def run_rule(self, name: str) -> Any:
        """Run one rule now. Exceptions are logged, never raised.

        Returns:
            The rule's result, or None if it failed
        """
        rule = self._rule(name)
        close_old_connections()
        with scheduler_rule_context(name):
            try:
                result = rule()
            except Exception as e:
                logger.error("scheduler_rule_failed", error=str(e), exc_info=e)
                return None
            finally:
                close_old_connections()
            logger.debug("scheduler_rule_completed", result=result)
            return result

    def start(self) -> None:
        """Register every configured rule and start the backend."""
        if self.running:
            logger.warning("scheduler_already_running")
            return

        for name, expression in self.schedule.items():
            self._rule(name)
            job = self.backend.add_job(
                self.run_rule,
                trigger=CronTrigger.from_crontab(expression, timezone=notification_tz()),
                args=[name],
                id=name,
                name=name,
                replace_existing=True,
                **JOB_DEFAULTS,
            )
            self.jobs.append(job)
            logger.info("scheduler_rule_registered", rule=name, cron=expression)

        self.backend.start()
        logger.info("scheduler_started", rules=len(self.jobs))

    def stop(self, wait: bool = True) -> None:
        """Remove every job and shut the backend down.

        Args:
            wait: Let in-flight rule runs finish before returning
        """
        for job in self.jobs:
            try:
                job.remove()
            except JobLookupError:
                logger.debug("scheduler_job_already_removed", job_id=job.id)
        self.jobs.clear()

        if self.running:
            self.backend.shutdown(wait=wait)
        logger.info("scheduler_stopped")
