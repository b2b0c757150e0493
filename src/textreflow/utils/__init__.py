"""Shared helpers: UTF-8 scanning, errors and logging."""
