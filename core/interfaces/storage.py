from abc import ABC, abstractmethod
from typing import Any, BinaryIO

from core.models.storage import StorageCommonPrefix, StorageObject


class BaseStorageClient(ABC):
    """
    Abstract interface for chunk object storage (bucket client)

    One client serves one bucket under one endpoint with one set of credentials.
    The storage-tiering layer only depends on this capability set, so any
    object-storage backend can be substituted behind it.

    Implementations:
    - ObsStorageClient (Huawei Cloud OBS)
    """

    @abstractmethod
    async def connect(self) -> None:
        """Open the backend session"""

    @abstractmethod
    async def get_object(self, key: str) -> Any:
        """
        Fetch an object

        Args:
            key: Object key

        Returns:
            Readable, closable byte stream positioned at the start of the object.
            The caller owns the stream and must close it.
        """

    @abstractmethod
    async def put_object(self, key: str, body: BinaryIO) -> None:
        """
        Upload an object, overwriting any existing object at the same key

        Args:
            key: Object key
            body: Seekable binary file object holding the full content
        """

    @abstractmethod
    async def delete_object(self, key: str) -> None:
        """
        Delete an object

        Args:
            key: Object key
        """

    @abstractmethod
    async def list_objects(
        self, prefix: str, delimiter: str = ""
    ) -> tuple[list[StorageObject], list[StorageCommonPrefix]]:
        """
        List every object under a prefix

        Args:
            prefix: Key prefix filter
            delimiter: Group keys into common prefixes up to this separator

        Returns:
            (objects, common prefixes), aggregated across all pages
        """

    @abstractmethod
    def is_object_not_found(self, err: Exception) -> bool:
        """Return True if err is the backend's "no such object" error"""

    @abstractmethod
    async def stop(self) -> None:
        """Release the backend session"""
