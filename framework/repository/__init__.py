"""
Repository pattern: data access abstraction, decouples service layer from database session.
"""

from .base import IRepository, Repository
from .unit_of_work import UnitOfWork

__all__ = ["IRepository", "Repository", "UnitOfWork"]
