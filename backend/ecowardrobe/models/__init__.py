"""
Database models for the Eco Wardrobe backend.

Import all models here to ensure they are registered with SQLAlchemy.
"""
from ecowardrobe.database import Base
from .blob import StoredBlob

__all__ = ["Base", "StoredBlob"]
