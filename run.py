"""Entry point for serving the Perks API.

Starts uvicorn with the host and port from ``Settings`` (``HOST`` and
``PORT`` environment variables, defaulting to ``0.0.0.0:8000``).

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from perks_api.app.core.config import settings
from perks_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Shutting down")
