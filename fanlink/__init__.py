"""Fanlink - music metadata resolution for smart links and pre-saves."""

__version__ = "0.1.0"
