#!/usr/bin/env python3
"""
BoM Radar Viewer API - run locally

Usage:
    uv run python main.py
    # Then point the client at http://localhost:3001
"""
import uvicorn

from bom_radar_viewer.config import Settings
from bom_radar_viewer.logging import configure_from_env

if __name__ == "__main__":
    settings = Settings.from_env()
    logger = configure_from_env()
    logger.info(f"Starting BoM Radar Viewer API on http://{settings.host}:{settings.port}")
    logger.info(f"Try: http://localhost:{settings.port}/api/radar/IDR663")
    uvicorn.run("bom_radar_viewer.server:app", host=settings.host, port=settings.port, log_config=None)
