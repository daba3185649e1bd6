"""Scheduling and progression engine for multi-week training cycles."""

__version__ = "0.1.0"
