"""Keyboard macro engine: profiles, combo triggers, timed key sequences and recording."""

__version__ = "0.5.0"
__all__ = ["config", "keys", "triggers", "engine", "recorder", "editor"]