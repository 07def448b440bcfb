"""Django project package for the smart-utensil notification service."""
