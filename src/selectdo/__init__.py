"""Select + Do - pick the next task that fits your time, and focus on it."""

__version__ = "0.3.0"
