"""Next.js Plugin for Litestar.

This module provides the NextJSPlugin class for serving a static Next.js export
(``next build`` with ``output: "export"``) from Litestar. The plugin handles:

- Static asset serving for the export directory, with index fallback on misses
- SPA route registration backed by the build manifest's route table
- One-time route table initialization in the application lifespan

Example::

    from litestar import Litestar
    from litestar_nextjs import NextJSConfig, NextJSPlugin

    app = Litestar(
        plugins=[NextJSPlugin(config=NextJSConfig(index_file="out/index.html", static_resources_location="out"))],
    )
"""

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from litestar.plugins import InitPluginProtocol

from litestar_nextjs.plugin._utils import log_info, log_success, log_warn

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from litestar import Litestar
    from litestar.config.app import AppConfig

    from litestar_nextjs.config import NextJSConfig
    from litestar_nextjs.handler import AppHandler


class NextJSPlugin(InitPluginProtocol):
    """Next.js static export plugin for Litestar.

    Example::

        from litestar import Litestar
        from litestar_nextjs import NextJSPlugin, NextJSConfig

        app = Litestar(
            plugins=[
                NextJSPlugin(config=NextJSConfig(static_resources_location="out", wildcards=True))
            ],
        )
    """

    __slots__ = ("_config", "_spa_handler")

    def __init__(self, config: "NextJSConfig | None" = None) -> None:
        """Initialize the Next.js plugin.

        Args:
            config: Next.js configuration. Defaults to NextJSConfig() if not provided.
        """
        from litestar_nextjs.config import NextJSConfig

        if config is None:
            config = NextJSConfig()
        self._config = config
        self._spa_handler: "AppHandler | None" = None

    @property
    def config(self) -> "NextJSConfig":
        """Get the Next.js configuration.

        Returns:
            The NextJSConfig instance.
        """
        return self._config

    @property
    def spa_handler(self) -> "AppHandler | None":
        """Return the SPA handler once the plugin has been registered on an app.

        Returns:
            The AppHandler instance, or None before ``on_app_init``.
        """
        return self._spa_handler

    def on_app_init(self, app_config: "AppConfig") -> "AppConfig":
        """Configure the Litestar application to serve the Next.js export.

        Args:
            app_config: The Litestar application configuration.

        Returns:
            The modified application configuration.
        """
        from litestar.connection import Request as LitestarRequest

        from litestar_nextjs.handler import AppHandler

        app_config.signature_namespace["Request"] = LitestarRequest

        self._spa_handler = AppHandler(self._config)
        # A root mount shares ``/{path:path}`` with the SPA route, which then serves assets itself.
        if not self._config.serves_assets_at_root:
            app_config.route_handlers.append(self._spa_handler.create_asset_route_handler())
        app_config.route_handlers.append(self._spa_handler.create_route_handler())
        app_config.lifespan.append(self.lifespan)  # pyright: ignore[reportUnknownMemberType]

        return app_config

    @asynccontextmanager
    async def lifespan(self, app: "Litestar") -> "AsyncIterator[None]":
        """Worker-level lifespan context manager.

        Builds the route table from the build manifest once per worker. Manifest
        problems never prevent startup; the table is simply left empty.

        Args:
            app: The Litestar application instance.

        Yields:
            None
        """
        if self._spa_handler is not None and not self._spa_handler.is_initialized:
            await self._spa_handler.initialize_async()
            route_count = len(self._spa_handler.route_table)
            if route_count:
                log_success(f"Next.js route table loaded ({route_count} routes)")
            else:
                log_warn(
                    "No routes loaded from the Next.js build manifest. "
                    f"Page requests will be answered with {self._config.index_file}."
                )
            if self._config.wildcards:
                log_info("Wildcard resolution enabled for numeric path segments")

        yield


__all__ = ("NextJSPlugin",)
