"""Command line interface for :mod:`pig`."""
