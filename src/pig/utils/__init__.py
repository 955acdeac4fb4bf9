"""Shared helpers for the :mod:`pig` package."""
