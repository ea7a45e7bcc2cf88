"""Shared kernel: configuration, exceptions and utilities."""
