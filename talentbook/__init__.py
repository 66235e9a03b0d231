"""Notification and approval workflow service for the talent booking marketplace."""
