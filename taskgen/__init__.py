"""AI task generator: break a goal into actionable tasks."""

__version__ = "0.1.0"
