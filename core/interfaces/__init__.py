"""Interfaces module - Abstract base classes for cloud services"""

from .metrics import BaseMetricsSink
from .storage import BaseStorageClient

__all__ = [
    "BaseMetricsSink",
    "BaseStorageClient",
]
