"""Runtime settings, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _split_csv(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


@dataclass(frozen=True)
class Settings:
    database_url: str = "mongodb://localhost:27017/?replicaSet=rs0"
    database_name: str = "orderdesk"
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    # Per client address, shared by all routes; empty disables throttling
    rate_limit: str = "100/15minutes"
    max_body_bytes: int = 10 * 1024 * 1024

    @staticmethod
    def from_env() -> Settings:
        defaults = Settings()
        return Settings(
            database_url=os.getenv("DATABASE_URL", defaults.database_url),
            database_name=os.getenv("DATABASE_NAME", defaults.database_name),
            host=os.getenv("HOST", defaults.host),
            port=int(os.getenv("PORT", str(defaults.port))),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
            cors_origins=_split_csv(os.getenv("CORS_ORIGINS", "*")),
            rate_limit=os.getenv("RATE_LIMIT", defaults.rate_limit).strip(),
            max_body_bytes=int(os.getenv("MAX_BODY_BYTES", str(defaults.max_body_bytes))),
        )
