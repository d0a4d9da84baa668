"""Shared utilities (logging, constants)."""
