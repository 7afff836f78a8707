"""Shared helpers: price validation, error payloads and request context."""
