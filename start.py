#!/usr/bin/env python3
"""
Start script - serves app.main:app with uvicorn on settings.app_host/app_port.

The PORT environment variable, when set, overrides APP_PORT.
"""
import os

from core.config import settings

if __name__ == "__main__":
    port = int(os.getenv("PORT", settings.app_port))

    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=port,
        log_level=settings.log_level.lower()
    )
