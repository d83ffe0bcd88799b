"""Models module - Pydantic data models"""

from .storage import StorageCommonPrefix, StorageObject

__all__ = [
    "StorageObject",
    "StorageCommonPrefix",
]
