#!/usr/bin/env python
"""Run the Django development server for the notification service."""

import os
import sys

from django.core.management import execute_from_command_line


def main():
    """Start ``runlocal``, which skips the migration check."""
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "spoon_service.settings")
    execute_from_command_line([sys.argv[0], "runlocal", *sys.argv[1:]])


if __name__ == "__main__":
    main()
