"""cadence - recurring task tracker with adaptive due dates."""

__version__ = "0.3.0"
