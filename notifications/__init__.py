"""Notification scheduling and delivery app for the smart-utensil backend."""
