"""
Object storage configuration loader with YAML support and Pydantic validation
"""

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

from config.settings import STORAGE_CONFIG_PATH
from core.exceptions import ConfigurationError
from core.utils.config import get_section, load_yaml_safe

logger = logging.getLogger(__name__)


class ObsStorageConfig(BaseSettings):
    """
    Huawei OBS bucket client configuration

    Every field may also come from the environment / .env as OBS_<FIELD>
    (e.g. OBS_ACCESS_KEY), or <PREFIX>_OBS_<FIELD> when loaded with a prefix.
    Immutable once loaded.
    """

    model_config = SettingsConfigDict(
        env_prefix="OBS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    access_key: str = ""
    secret_key: str = ""
    endpoint: str = ""
    bucket: str = ""
    # Optional; botocore signs for us-east-1 when unset
    region: str = ""

    def verify(self) -> None:
        """
        Check the configuration is usable

        Raises:
            ConfigurationError: Missing bucket, only one of access/secret key, or missing endpoint
        """
        if not self.bucket:
            raise ConfigurationError("no Huawei OBS Bucket specified")
        if bool(self.access_key) != bool(self.secret_key):
            raise ConfigurationError("must supply both an Access Key and Secret Key or neither")
        if not self.endpoint:
            raise ConfigurationError("endpoint must be specified")

    @property
    def has_credentials(self) -> bool:
        return bool(self.access_key and self.secret_key)


def env_prefix_for(prefix: str) -> str:
    """
    Environment variable prefix for a config prefix

    Example:
        >>> env_prefix_for("")
        'OBS_'
        >>> env_prefix_for("ruler")
        'RULER_OBS_'
    """
    if not prefix:
        return "OBS_"
    return f"{prefix.upper().replace('.', '_').replace('-', '_')}_OBS_"


def load_obs_storage_config(
    prefix: str = "", config_path: str = STORAGE_CONFIG_PATH
) -> ObsStorageConfig:
    """
    Load and validate OBS configuration from YAML + environment

    endpoint/bucket/region are read from the `obs` section of the YAML file (nested
    under `prefix` when given); anything the YAML omits, including the
    credentials, is read from the environment / .env.

    Args:
        prefix: Section prefix, so several backends can coexist (e.g. "ruler")
        config_path: Path to storage.yaml

    Returns:
        ObsStorageConfig: Verified configuration

    Raises:
        ConfigurationError: If the resulting configuration is invalid

    Example:
        >>> cfg = load_obs_storage_config()
        >>> print(cfg.bucket)
        cortex-chunks
    """
    section_path = f"{prefix}.obs" if prefix else "obs"
    section = get_section(load_yaml_safe(config_path), section_path)

    # Only non-secret keys come from YAML; init values take priority over env
    yaml_values = {
        key: str(section[key]) for key in ("endpoint", "bucket", "region")
        if section.get(key) is not None
    }

    config = ObsStorageConfig(_env_prefix=env_prefix_for(prefix), **yaml_values)

    try:
        config.verify()
    except ConfigurationError as e:
        logger.error(f"Invalid OBS config ({section_path}): {e}")
        raise

    logger.info(f"✓ Loaded OBS config ({section_path}): bucket={config.bucket} endpoint={config.endpoint}")
    return config


# Convenience exports
__all__ = [
    "ObsStorageConfig",
    "env_prefix_for",
    "load_obs_storage_config",
]
