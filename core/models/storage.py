"""
Object storage models

Pydantic models returned by bucket clients:
- StorageObject: Listed object (key + last modification time)
- StorageCommonPrefix: Directory-like grouping from a delimited listing
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# Grouping label returned when a delimiter is passed to list_objects()
StorageCommonPrefix = str


class StorageObject(BaseModel):
    """
    Object entry from a bucket listing

    Read-only snapshot of the backend's listing, never persisted by the client
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Object key within the bucket")
    modified_at: datetime = Field(description="Last modification time reported by the backend")
