"""Launch the Larder ASGI application under uvicorn."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

import uvicorn

logger = logging.getLogger(__name__)

APP_IMPORT_PATH = "larder.server.app:app"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


async def _serve_for(server: uvicorn.Server, duration: float) -> None:
    """Serve until ``duration`` seconds have elapsed, then ask uvicorn to exit."""

    async def _shutdown() -> None:
        await asyncio.sleep(duration)
        server.should_exit = True

    asyncio.create_task(_shutdown())
    await server.serve()


def parse_duration(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        parsed = float(value)
    except ValueError as exc:
        raise SystemExit(f"Invalid LARDER_SERVER_DURATION '{value}': {exc}") from exc
    if parsed <= 0:
        raise SystemExit("LARDER_SERVER_DURATION must be greater than 0 when provided.")
    return parsed


def serve(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    *,
    reload: bool = False,
    duration: Optional[float] = None,
) -> None:
    """Run the matcher API; ``duration`` bounds the run for smoke checks."""

    if reload and duration is not None:
        raise SystemExit("Reload mode cannot be combined with a bounded duration.")

    logger.info("Starting Larder API on %s:%s", host, port)
    if reload:
        uvicorn.run(APP_IMPORT_PATH, host=host, port=port, reload=True)
        return

    server = uvicorn.Server(uvicorn.Config(APP_IMPORT_PATH, host=host, port=port))
    if duration is not None:
        asyncio.run(_serve_for(server, duration))
        return
    server.run()


def main() -> None:
    """Entry point for the ``larder-server`` script (configured by environment)."""

    serve(
        os.environ.get("LARDER_SERVER_HOST", DEFAULT_HOST),
        int(os.environ.get("LARDER_SERVER_PORT", str(DEFAULT_PORT))),
        reload=os.environ.get("RELOAD") == "1",
        duration=parse_duration(os.environ.get("LARDER_SERVER_DURATION")),
    )


if __name__ == "__main__":
    main()
