from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env file."""

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "VMHEALTH_",
        "extra": "ignore",
    }

    # Resources strictly under this percentage are healthy (applies to all three)
    threshold: int = 60

    # Seconds between the two CPU-times samples of the idle probe
    cpu_sample_interval: float = 1.0

    # Filesystem reported by the disk sampler
    disk_path: str = "/"

    # Logging
    log_level: str = "WARNING"


settings = Settings()
