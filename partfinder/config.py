"""Application configuration and constants."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


def _get_flag(name: str, default: str) -> bool:
    return _get_env(name, default).lower() in {"1", "true", "yes"}


_DATA_DIR = _get_env("DATA_DIR", str(PACKAGE_DIR / "data"))


@dataclass(frozen=True)
class Settings:
    """Simple settings container with environment variable overrides."""

    app_name: str = "Spare Part Finder Dummy API"
    app_version: str = "1.0.0"
    environment: str = _get_env("APP_ENV", "development")
    host: str = _get_env("HOST", "0.0.0.0")
    port: int = int(_get_env("PORT", "5000"))
    allowed_origins: str = _get_env("ALLOWED_ORIGINS", "*")
    log_level: str = _get_env("LOG_LEVEL", "INFO")
    simulate_delay: bool = _get_flag("SIMULATE_DELAY", "true")
    data_dir: str = _DATA_DIR
    vehicles_path: str = _get_env("VEHICLES_PATH", os.path.join(_DATA_DIR, "mockVehicles.json"))
    parts_path: str = _get_env("PARTS_PATH", os.path.join(_DATA_DIR, "mockParts.json"))
    sellers_path: str = _get_env("SELLERS_PATH", os.path.join(_DATA_DIR, "mockSellers.json"))
    use_redis: bool = _get_flag("USE_REDIS", "false")
    redis_host: str = _get_env("REDIS_HOST", "localhost")
    redis_port: int = int(_get_env("REDIS_PORT", "6379"))
    request_ttl_seconds: int = int(_get_env("REQUEST_TTL_SECONDS", "86400"))

    @property
    def origins(self) -> list[str]:
        if self.allowed_origins.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


settings = Settings()
