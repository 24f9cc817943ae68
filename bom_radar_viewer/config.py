"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass, field
from typing import List

DEFAULT_RADAR_HOST = "https://reg.bom.gov.au"
DEFAULT_WEATHER_API = "https://api.weather.bom.gov.au/v1"


def _origins(raw: str) -> List[str]:
    return [o.strip() for o in raw.split(",") if o.strip()] or ["*"]


@dataclass(frozen=True)
class Settings:
    host: str = "127.0.0.1"
    port: int = 3001
    radar_host: str = DEFAULT_RADAR_HOST
    weather_api: str = DEFAULT_WEATHER_API
    # Upstream fetches hang forever without this
    upstream_timeout: float = 15.0
    cache_ttl_seconds: float = 300.0
    cache_max_entries: int = 1024
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    user_agent: str = "bom-radar-viewer/0.1.0"

    @classmethod
    def from_env(cls) -> "Settings":
        env = os.environ
        return cls(
            host=env.get("HOST", "127.0.0.1"),
            port=int(env.get("PORT", "3001")),
            radar_host=env.get("BOM_RADAR_HOST", DEFAULT_RADAR_HOST).rstrip("/"),
            weather_api=env.get("BOM_WEATHER_API", DEFAULT_WEATHER_API).rstrip("/"),
            upstream_timeout=float(env.get("BOM_UPSTREAM_TIMEOUT", "15")),
            cache_ttl_seconds=float(env.get("BOM_CACHE_TTL_SECONDS", "300")),
            cache_max_entries=int(env.get("BOM_CACHE_MAX_ENTRIES", "1024")),
            cors_origins=_origins(env.get("BOM_CORS_ORIGINS", "*")),
        )
