"""Placeholder substitution for notification templates."""

import re
from collections.abc import Mapping
from typing import Any

PLACEHOLDER_PATTERN = re.compile(r"\{\{([^{}]+)\}\}")


def render(template: str, data: Mapping[str, Any] | None = None) -> str:
    """Replace ``{{key}}`` placeholders with ``str(data[key])``.

    Any text between the braces is a key, so ``meal-id`` and ``user.name``
    work. Keys missing from ``data`` are left in place verbatim. Whitespace
    inside the braces is not trimmed: ``{{ key }}`` only matches ``" key "``.

    Args:
        template: Template text
        data: Substitution values

    Returns:
        The rendered text
    """
    if not data:
        return template

    def _substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in data:
            return str(data[key])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_substitute, template)
