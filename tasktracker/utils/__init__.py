"""Shared helpers (environment parsing, logging setup)."""
