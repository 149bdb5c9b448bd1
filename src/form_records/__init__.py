"""Local JSON-backed form records (profiles or tasks)."""

__version__ = "0.1.0"
