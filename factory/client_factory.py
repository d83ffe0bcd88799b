"""
Client factory - Auto-create clients based on configuration

Dependency injection pattern for cloud-agnostic code
"""

import logging

from config.settings import get_settings
from core.interfaces.metrics import BaseMetricsSink
from core.interfaces.storage import BaseStorageClient

logger = logging.getLogger(__name__)


def create_storage_client(
    prefix: str = "", metrics: BaseMetricsSink | None = None
) -> BaseStorageClient:
    """
    Create chunk storage client based on CLOUD_PROVIDER config

    Args:
        prefix: Config section prefix (e.g. "ruler"), lets several backends coexist
        metrics: Metrics sink (defaults to the process-wide request duration histogram)

    Returns:
        BaseStorageClient: Huawei OBS, S3, GCS, Azure Blob, etc. (not yet connected)

    Examples:
        >>> # .env: CLOUD_PROVIDER=huawei
        >>> client = create_storage_client()  # Returns ObsStorageClient
        >>> await client.connect()
    """
    settings = get_settings()
    provider = settings.CLOUD_PROVIDER.lower()

    if provider in ["huawei", "obs"]:
        from config.loader import load_obs_storage_config
        from providers.huawei.obs import ObsStorageClient

        config = load_obs_storage_config(prefix)
        logger.info(f"✓ Creating ObsStorageClient ({provider}, bucket: {config.bucket})")
        return ObsStorageClient(config, metrics=metrics)

    elif provider == "aws":
        # TODO: Implement S3 chunk client on the same BaseStorageClient contract
        raise NotImplementedError("AWS S3StorageClient not implemented yet")

    elif provider == "gcp":
        # TODO: Implement GCSStorageClient
        raise NotImplementedError("GCP GCSStorageClient not implemented yet")

    elif provider == "azure":
        # TODO: Implement BlobStorageClient
        raise NotImplementedError("Azure BlobStorageClient not implemented yet")

    else:
        raise ValueError(
            f"Unsupported cloud provider: {provider}. "
            f"Supported: huawei (OBS), aws, gcp, azure"
        )
