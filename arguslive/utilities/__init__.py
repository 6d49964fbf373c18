"""Shared utilities: logging, timezones, category matching."""
