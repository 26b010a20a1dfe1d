"""
Listener bootstrap: one plaintext and/or one TLS uvicorn server sharing a
single application instance.

There is no graceful shutdown; the process runs until it is killed.
"""

import asyncio
import logging
from typing import List, Tuple

import uvicorn
from fastapi import FastAPI

from pocket_app.config import GeneralSettings
from pocket_app.errors import ListenerError

logger = logging.getLogger(__name__)


def build_servers(app: FastAPI, general: GeneralSettings) -> List[Tuple[str, uvicorn.Server]]:
    """
    Create the uvicorn servers enabled by the ``[general]`` flags.

    Returns:
        ``(name, server)`` pairs, ``http`` first, then ``ssl``
    """
    servers = []

    if general.http_enabled:
        config = uvicorn.Config(
            app,
            host=general.host,
            port=general.http_port,
            log_level=general.loglevel,
            log_config=None,
        )
        servers.append(("http", uvicorn.Server(config)))

    if general.ssl_enabled:
        config = uvicorn.Config(
            app,
            host=general.host,
            port=general.ssl_port,
            ssl_certfile=general.sslcert,
            ssl_keyfile=general.sslkey,
            log_level=general.loglevel,
            log_config=None,
        )
        servers.append(("ssl", uvicorn.Server(config)))

    return servers


async def _serve(name: str, server: uvicorn.Server) -> None:
    logger.info("🚀 Starting %s server on %s:%s", name, server.config.host, server.config.port)
    try:
        await server.serve()
    except SystemExit as e:
        # uvicorn exits the process itself when the bind fails
        raise ListenerError(f"could not start {name} server: bind failed") from e
    except OSError as e:
        raise ListenerError(f"could not start {name} server: {e}") from e

    if not server.started:
        raise ListenerError(f"could not start {name} server")


async def serve_forever(servers: List[Tuple[str, uvicorn.Server]]) -> None:
    """
    Run all servers until the process is killed.

    Raises:
        ListenerError: as soon as any server fails to start
    """
    if not servers:
        logger.warning("No listener enabled (httpenabled/sslenabled are not \"true\"); idling")
        await asyncio.Event().wait()
        return

    await asyncio.gather(*(_serve(name, server) for name, server in servers))
