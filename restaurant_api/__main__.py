"""
Server launcher.

Usage:
    python -m restaurant_api
    restaurant-api

Host and port come from API_HOST / API_PORT (see core/config.py).
"""

import uvicorn

from restaurant_api.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "restaurant_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
