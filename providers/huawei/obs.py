"""
Huawei Cloud OBS implementation of the chunk storage bucket client

Talks to OBS through its S3-compatible API
"""

import logging
from typing import Any, BinaryIO

import aioboto3
from botocore.exceptions import ClientError

from config.loader import ObsStorageConfig
from core.exceptions import StorageConnectionError
from core.interfaces.metrics import BaseMetricsSink
from core.interfaces.storage import BaseStorageClient
from core.metrics import get_obs_request_duration
from core.models.storage import StorageCommonPrefix, StorageObject
from core.utils.instrument import collected_request

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


def normalize_endpoint(endpoint: str) -> str:
    """
    Turn an OBS endpoint into a URL

    Example:
        >>> normalize_endpoint("obs.cn-north-4.myhuaweicloud.com")
        'https://obs.cn-north-4.myhuaweicloud.com'
    """
    if "://" in endpoint:
        return endpoint
    return f"https://{endpoint}"


class ObsStorageClient(BaseStorageClient):
    """
    Huawei OBS bucket client

    Features:
    - One bucket, one endpoint, one set of credentials
    - Empty credentials fall back to the SDK's implicit credential chain
    - Every call reports (operation, status_code, duration) to a metrics sink
    - Backend errors are passed through untouched (no retry, no translation)

    Usage:
        client = ObsStorageClient(load_obs_storage_config())
        await client.connect()
        objects, prefixes = await client.list_objects("chunks/", "/")
        await client.stop()
    """

    def __init__(self, config: ObsStorageConfig, metrics: BaseMetricsSink | None = None):
        # Reject bad config before any network activity
        config.verify()

        self.config = config
        self.metrics = metrics if metrics is not None else get_obs_request_duration()
        self.session: aioboto3.Session | None = None
        self.client = None
        self._client_ctx = None

    async def connect(self) -> None:
        """Open the S3-compatible session against the OBS endpoint"""
        if self._client_ctx:
            logger.debug("OBS client already connected")
            return

        endpoint_url = normalize_endpoint(self.config.endpoint)
        try:
            self.session = aioboto3.Session()
            self._client_ctx = self.session.client(
                "s3",
                region_name=self.config.region or None,
                endpoint_url=endpoint_url,
                aws_access_key_id=self.config.access_key or None,
                aws_secret_access_key=self.config.secret_key or None,
            )
            self.client = await self._client_ctx.__aenter__()
        except Exception as e:
            self._client_ctx = None
            self.client = None
            logger.error(f"✗ Failed to connect to OBS ({endpoint_url}): {e}")
            raise StorageConnectionError(f"failed to connect to OBS endpoint {endpoint_url}: {e}") from e

        auth = "static credentials" if self.config.has_credentials else "implicit credentials"
        logger.info(f"✓ Connected to OBS: {endpoint_url} (bucket: {self.config.bucket}, {auth})")

    def _ensure_client(self):
        if not self.client:
            raise RuntimeError("OBS client not connected")
        return self.client

    async def get_object(self, key: str) -> Any:
        """
        Fetch an object

        Args:
            key: Object key

        Returns:
            Streaming body of the object; the caller reads and closes it
        """
        client = self._ensure_client()

        try:
            response = await collected_request(
                "OBS.GetObject",
                self.metrics,
                lambda: client.get_object(Bucket=self.config.bucket, Key=key),
            )
        except ClientError as e:
            if self.is_object_not_found(e):
                logger.debug(f"OBS object not found: {self.config.bucket}/{key}")
            else:
                logger.error(f"✗ OBS get error ({key}): {e}")
            raise

        return response["Body"]

    async def put_object(self, key: str, body: BinaryIO) -> None:
        """
        Upload an object

        Args:
            key: Object key
            body: Seekable binary file object; the whole content is uploaded
        """
        client = self._ensure_client()

        try:
            await collected_request(
                "OBS.PutObject",
                self.metrics,
                lambda: client.put_object(Bucket=self.config.bucket, Key=key, Body=body),
            )
        except ClientError as e:
            logger.error(f"✗ OBS put error ({key}): {e}")
            raise

        logger.debug(f"Uploaded to OBS: {self.config.bucket}/{key}")

    async def delete_object(self, key: str) -> None:
        """Delete an object (backend semantics for missing keys are kept as-is)"""
        client = self._ensure_client()

        try:
            await collected_request(
                "OBS.DeleteObject",
                self.metrics,
                lambda: client.delete_object(Bucket=self.config.bucket, Key=key),
            )
        except ClientError as e:
            logger.error(f"✗ OBS delete error ({key}): {e}")
            raise

        logger.debug(f"Deleted from OBS: {self.config.bucket}/{key}")

    async def list_objects(
        self, prefix: str, delimiter: str = ""
    ) -> tuple[list[StorageObject], list[StorageCommonPrefix]]:
        """
        List every object under a prefix, following pagination markers

        A truncated page without a NextMarker ends the listing without error.
        An error on any page discards everything collected so far.

        Args:
            prefix: Key prefix filter
            delimiter: If set, keys are grouped server-side into common prefixes

        Returns:
            (objects, common prefixes)
        """
        client = self._ensure_client()

        async def _list() -> tuple[list[StorageObject], list[StorageCommonPrefix]]:
            objects: list[StorageObject] = []
            common_prefixes: list[StorageCommonPrefix] = []
            request: dict[str, Any] = {"Bucket": self.config.bucket, "Prefix": prefix}
            if delimiter:
                request["Delimiter"] = delimiter

            while True:
                output = await client.list_objects(**request)

                for content in output.get("Contents", []):
                    objects.append(
                        StorageObject(key=content["Key"], modified_at=content["LastModified"])
                    )
                for common_prefix in output.get("CommonPrefixes", []):
                    common_prefixes.append(common_prefix["Prefix"])

                if not output.get("IsTruncated"):
                    break
                next_marker = output.get("NextMarker")
                if not next_marker:
                    break
                request["Marker"] = next_marker

            return objects, common_prefixes

        try:
            objects, common_prefixes = await collected_request("OBS.ListObject", self.metrics, _list)
        except ClientError as e:
            logger.error(f"✗ OBS list error ({prefix}): {e}")
            raise

        logger.debug(
            f"Listed {len(objects)} objects, {len(common_prefixes)} prefixes "
            f"in {self.config.bucket}/{prefix}"
        )
        return objects, common_prefixes

    def is_object_not_found(self, err: Exception) -> bool:
        if not isinstance(err, ClientError):
            return False
        return err.response.get("Error", {}).get("Code") in NOT_FOUND_CODES

    async def stop(self) -> None:
        """Close the OBS session"""
        if not self._client_ctx:
            return

        ctx = self._client_ctx
        self._client_ctx = None
        self.client = None
        try:
            await ctx.__aexit__(None, None, None)
            logger.info("✓ OBS connection closed")
        except Exception as e:
            logger.error(f"Error closing OBS client: {e}")
