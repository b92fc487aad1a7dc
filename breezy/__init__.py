"""Keeps one draft GitHub release per branch with a changelog of merged pull requests."""

__version__ = "0.1.0"
