"""Run the catalog service with uvicorn."""

from __future__ import annotations

import logging

import uvicorn

from .app import create_app
from .config import get_settings

logger = logging.getLogger(__name__)

ENDPOINTS = (
    "GET    /health",
    "GET    /api/v1/products",
    "GET    /api/v1/products/{id}",
    "POST   /api/v1/products",
    "PUT    /api/v1/products/{id}",
    "DELETE /api/v1/products/{id}",
    "GET    /api/v1/products/category/{category}",
)


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(settings=settings)

    logger.info("%s starting on %s:%d", settings.app_name, settings.host, settings.port)
    logger.info("Endpoints:")
    for endpoint in ENDPOINTS:
        logger.info("   %s", endpoint)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
