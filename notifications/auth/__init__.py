"""Authentication for the notification API."""
