"""Persistence layer for stored pre-saves."""
