"""Runtime configuration for the GoHighLevel MCP servers."""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_BASE_URL = "https://services.leadconnectorhq.com"
DEFAULT_API_VERSION = "2021-07-28"


class Settings(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    timeout: float = 30.0
    # Fallback credentials, used only when neither the call nor the request
    # headers provide them.
    api_key: str | None = None
    location_id: str | None = None
    server: str = "core"
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build settings from the environment, reading ``.env`` first."""
    load_dotenv(override=True)
    return Settings(
        base_url=os.getenv("GHL_BASE_URL", DEFAULT_BASE_URL),
        api_version=os.getenv("GHL_API_VERSION", DEFAULT_API_VERSION),
        timeout=float(os.getenv("GHL_TIMEOUT_SECONDS", "30")),
        api_key=os.getenv("GHL_API_KEY") or None,
        location_id=os.getenv("GHL_LOCATION_ID") or None,
        server=os.getenv("GHL_MCP_SERVER", "core"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
