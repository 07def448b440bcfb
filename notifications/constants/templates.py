"""Default notification template catalogue.

The ``seed_notification_templates`` management command upserts these rows
into ``notification_templates``. Placeholders use ``{{key}}`` syntax and are
filled from the data passed to ``NotificationService.schedule``.
"""

DEFAULT_TEMPLATES = [
    {
        "type": "daily_goal_reached",
        "category": "achievement",
        "priority": "MEDIUM",
        "title_template": "Daily goal reached!",
        "body_template": "You logged {{bites}} bites yesterday and hit your goal of {{goal}}.",
        "action_type": "open_dashboard",
        "action_data": {"screen": "dashboard"},
        "max_per_day": 1,
    },
    {
        "type": "streak_milestone",
        "category": "achievement",
        "priority": "MEDIUM",
        "title_template": "{{days}}-day streak",
        "body_template": "You have tracked your meals {{days}} days in a row. Keep going!",
        "action_type": "open_dashboard",
        "action_data": {"screen": "dashboard"},
        "max_per_day": 1,
    },
    {
        "type": "weekly_summary",
        "category": "engagement",
        "priority": "LOW",
        "title_template": "Your week at the table",
        "body_template": "{{bites}} bites this week at an average pace of {{pace}} bites/min. {{trend}}",
        "action_type": "open_weekly_report",
        "action_data": {"screen": "weekly_report"},
        "max_per_day": 1,
    },
    {
        "type": "device_inactive",
        "category": "engagement",
        "priority": "LOW",
        "title_template": "We miss you",
        "body_template": "Your spoon has not synced for a few days. Pair it again to keep your insights up to date.",
        "action_type": "open_device",
        "action_data": {"screen": "device"},
        "max_per_day": 1,
    },
    {
        "type": "fast_eating_alert",
        "category": "health",
        "priority": "HIGH",
        "title_template": "Slow down a little",
        "body_template": "Your last meal averaged {{pace}} bites per minute. Try putting the spoon down between bites.",
        "action_type": "open_meal",
        "action_data": {"screen": "meal_detail"},
        "max_per_day": 3,
    },
    {
        "type": "tremor_spike_alert",
        "category": "health",
        "priority": "CRITICAL",
        "title_template": "Unusual tremor detected",
        "body_template": "Tremor intensity reached {{intensity}} during your last meal.",
        "action_type": "open_tremor_report",
        "action_data": {"screen": "tremor"},
        "max_per_day": 3,
    },
    {
        "type": "temperature_alert",
        "category": "health",
        "priority": "HIGH",
        "title_template": "Careful, it's hot",
        "body_template": "Food temperature reached {{temperature}}°C.",
        "action_type": "open_meal",
        "action_data": {"screen": "meal_detail"},
        "max_per_day": 3,
    },
    {
        "type": "low_battery",
        "category": "system",
        "priority": "MEDIUM",
        "title_template": "Spoon battery low",
        "body_template": "Battery is at {{level}}%. Charge your spoon before your next meal.",
        "action_type": "open_device",
        "action_data": {"screen": "device"},
        "max_per_day": 1,
    },
    {
        "type": "system_alert",
        "category": "system",
        "priority": "HIGH",
        "title_template": "{{title}}",
        "body_template": "{{body}}",
        "action_type": "open_settings",
        "action_data": {},
        "max_per_day": None,
    },
]
