"""HTTP server bootstrap for the migration trigger."""

from __future__ import annotations

import logging
import threading
from http.server import ThreadingHTTPServer
from typing import Optional

from ..core.config import MigratorConfig
from .handler import Launcher, MigrationHandler

logger = logging.getLogger(__name__)


def make_handler_class(
    config: MigratorConfig, launcher: Optional[Launcher] = None
) -> type[MigrationHandler]:
    """Create a handler class with config (and optionally a launcher) bound."""
    attrs: dict[str, object] = {"config": config}
    if launcher is not None:
        attrs["launcher"] = staticmethod(launcher)
    return type("MigrationHandler", (MigrationHandler,), attrs)


def create_server(
    config: MigratorConfig,
    host: Optional[str] = None,
    port: Optional[int] = None,
    launcher: Optional[Launcher] = None,
) -> ThreadingHTTPServer:
    host = host or config.host
    port = config.port if port is None else port
    server = ThreadingHTTPServer((host, port), make_handler_class(config, launcher))
    logger.info("Migration server listening on http://%s:%s", host, server.server_address[1])
    return server


def start_server(
    config: MigratorConfig,
    host: Optional[str] = None,
    port: Optional[int] = None,
    launcher: Optional[Launcher] = None,
) -> tuple[ThreadingHTTPServer, threading.Thread]:
    """Start the server in a background thread.

    Returns:
        Tuple of (server, thread); call ``server.shutdown()`` to stop it.
    """
    server = create_server(config, host, port, launcher)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return server, thread


__all__ = ["make_handler_class", "create_server", "start_server"]
