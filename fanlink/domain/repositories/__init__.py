"""Domain repository interfaces following Clean Architecture principles."""

from .interfaces import PreSaveRepositoryProtocol

__all__ = ["PreSaveRepositoryProtocol"]
