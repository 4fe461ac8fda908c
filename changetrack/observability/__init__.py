"""Logging setup for applications embedding changetrack."""
