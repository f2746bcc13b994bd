"""jetsam - release chores for a single package."""

__version__ = "0.1.0"
