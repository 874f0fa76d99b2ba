"""Runtime configuration — env-driven.

Reads from a .env file and VIRTFS_* environment variables.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class VirtfsSettings(BaseSettings):
    """Settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export VIRTFS_LOG_LEVEL=DEBUG
        export VIRTFS_STREAM_CHUNK_SIZE=16384

    Or via .env file::

        VIRTFS_ENCODING=utf-8
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="VIRTFS_",
        env_file_encoding="utf-8",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "WARNING"

    # Content handling
    encoding: str = "utf-8"
    stream_chunk_size: int = 65536

    @property
    def is_production(self) -> bool:
        """Whether running in production mode."""
        return self.environment == "production"


# Module-level singleton: import as `from virtfs.config import settings`
settings = VirtfsSettings()
