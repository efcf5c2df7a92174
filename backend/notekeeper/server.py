"""
NoteKeeper — Server Lifecycle Manager
=======================================

What:  Runs the application under uvicorn and shuts it down gracefully.
How:   Wraps uvicorn.Server. Shutdown can be requested two ways:
       - an OS signal (SIGINT / SIGTERM), caught by uvicorn's own handlers
       - an explicit call to NoteServer.request_shutdown()
       Either way the listener stops accepting connections, in-flight
       requests get up to `shutdown_grace_period` seconds to finish, and any
       still running after that are cancelled.

Phases logged:
    starting server → server listening → shutting down server gracefully
    → server stopped
"""

import asyncio
import logging
import signal
from types import FrameType
from typing import Optional

import uvicorn
from fastapi import FastAPI

from notekeeper.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class GracefulServer(uvicorn.Server):
    """uvicorn.Server that logs when a shutdown is triggered."""

    def handle_exit(self, sig: int, frame: Optional[FrameType]) -> None:
        if self.should_exit and sig == signal.SIGINT:
            logger.warning("Second interrupt received, forcing shutdown")
        else:
            logger.info(
                "Received %s, shutting down server gracefully",
                signal.Signals(sig).name,
            )
        super().handle_exit(sig, frame)


class NoteServer:
    """
    Owns the listener for one FastAPI application.

    Usage:
        server = NoteServer(create_app())
        server.run()                 # blocks until shutdown completes

        # from another task or thread:
        server.request_shutdown()
    """

    def __init__(self, app: FastAPI, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.config = uvicorn.Config(
            app,
            host=self.settings.server_host,
            port=self.settings.server_port,
            timeout_keep_alive=self.settings.write_timeout,
            timeout_graceful_shutdown=self.settings.shutdown_grace_period,
            # Logging is configured by setup_logging(); keep uvicorn off it
            log_config=None,
        )
        self._server = GracefulServer(self.config)

    @property
    def started(self) -> bool:
        return self._server.started

    @property
    def shutting_down(self) -> bool:
        return self._server.should_exit

    def request_shutdown(self) -> None:
        """
        Begin graceful shutdown without an OS signal.

        Safe to call more than once; later calls are no-ops.
        """
        if self._server.should_exit:
            return
        logger.info(
            "shutting down server gracefully (grace period %ss)",
            self.settings.shutdown_grace_period,
        )
        self._server.should_exit = True

    async def serve(self) -> None:
        logger.info("starting server on %s", self.settings.server_address)
        try:
            await self._server.serve()
        except SystemExit:
            # uvicorn exits this way when the address cannot be bound
            logger.error("failed to start server on %s", self.settings.server_address)
            raise
        logger.info("server stopped")

    def run(self) -> None:
        asyncio.run(self.serve())
