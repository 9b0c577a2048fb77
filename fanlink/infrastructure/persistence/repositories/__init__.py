"""SQLAlchemy repository implementations."""

from .presave import PreSaveMapper, PreSaveRepository

__all__ = ["PreSaveMapper", "PreSaveRepository"]
