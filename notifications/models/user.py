"""User model (read-only view of the main application's users table)."""

from typing import ClassVar

from django.db import models

DEFAULT_DAILY_BITE_GOAL = 50


class User(models.Model):
    """App user as stored by the main backend.

    Unmanaged: the main application owns this table. Only the columns the
    notification rules read are mapped.
    """

    id = models.AutoField(primary_key=True)
    email = models.EmailField(max_length=255, unique=True)
    name = models.CharField(max_length=255, default="", blank=True)
    bite_goals = models.JSONField(
        null=True,
        blank=True,
        help_text="Goal settings, e.g. {'daily': 50}",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "users"
        managed = False
        ordering: ClassVar[list[str]] = ["id"]

    def __str__(self) -> str:
        """Return string representation of user."""
        return f"{self.name or 'user'} ({self.email})"

    @property
    def daily_bite_goal(self) -> int:
        """Daily bite goal, falling back to the app default.

        Missing, zero or malformed ``bite_goals`` entries use the default.
        """
        goals = self.bite_goals if isinstance(self.bite_goals, dict) else {}
        try:
            goal = int(goals.get("daily") or 0)
        except (TypeError, ValueError):
            return DEFAULT_DAILY_BITE_GOAL
        return goal if goal > 0 else DEFAULT_DAILY_BITE_GOAL
