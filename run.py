"""Local entry point for the Social Events API.

Starts the FastAPI application under Uvicorn on ``HOST``/``PORT``.
Configuration (``MONGO_URI``, ``PORT`` and so on) may be placed in a
``.env`` file next to this script.

When ``VERCEL`` is set the application is hosted per invocation by
the platform, which imports ``social_events_api.app.main:app``
itself; in that mode this script does not bind a socket.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from social_events_api.app.core.config import settings
from social_events_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level="info")
    server = Server(config)
    await server.serve()


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    if settings.embedded:
        logging.info("VERCEL is set; the host serves the app, not binding a socket")
        return
    asyncio.run(run_api())


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
