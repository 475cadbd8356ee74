"""Shared helpers: logging, errors, validation, timestamps."""
