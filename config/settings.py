"""
Application Settings - Load from YAML configs + .env secrets

Design Philosophy:
- Service configs (endpoints, buckets, histogram buckets) → YAML files (public, versioned in git)
- Secrets (access keys, secret keys) → .env file (gitignored)

Uses Pydantic for validation and type safety
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.utils.config import load_yaml_safe

STORAGE_CONFIG_PATH = "config/providers/storage.yaml"


class Settings(BaseSettings):
    """
    Application settings

    Architecture:
    - Infrastructure configs → config/providers/storage.yaml (public)
    - Secrets → .env (gitignored)

    Usage:
        from config.settings import get_settings

        settings = get_settings()
        print(settings.CLOUD_PROVIDER)  # From .env
        print(settings.OBS_REQUEST_DURATION_BUCKETS)  # From storage.yaml
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields in .env
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Load YAML configs from files (cached at class level)
        if not hasattr(Settings, "_yaml_loaded"):
            Settings._storage_config = load_yaml_safe(STORAGE_CONFIG_PATH)
            Settings._yaml_loaded = True

    # ============================================
    # ENVIRONMENT (.env only)
    # ============================================
    ENVIRONMENT: str = Field(default="local", description="Environment: local, dev, staging, prod")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # ============================================
    # CLOUD PROVIDER (.env only)
    # ============================================
    CLOUD_PROVIDER: str = Field(
        default="huawei",
        description="Object storage backend: huawei (OBS), aws, gcp, azure",
    )

    # ============================================
    # METRICS (from YAML)
    # ============================================
    @property
    def OBS_METRICS_NAMESPACE(self) -> str:
        """Metric namespace from storage.yaml"""
        return self._storage_config.get("metrics", {}).get("namespace", "cortex")

    @property
    def OBS_REQUEST_DURATION_BUCKETS(self) -> list[float]:
        """Histogram upper bounds (seconds) for OBS request durations"""
        buckets = self._storage_config.get("metrics", {}).get("obs_request_duration_buckets")
        if not buckets:
            return [0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0]
        return [float(b) for b in buckets]


# Singleton pattern
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """
    Get application settings (singleton)

    Returns:
        Settings instance

    Example:
        >>> settings = get_settings()
        >>> print(settings.CLOUD_PROVIDER)
        huawei
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
