"""SPA handler for Next.js static exports.

This module provides :class:`~litestar_nextjs.handler.AppHandler`, which owns the
route table built from the Next.js build manifest and turns request paths into
files to serve.
"""

import logging
import os
from typing import TYPE_CHECKING, Any

import anyio
from litestar import get

from litestar_nextjs.handler._routing import is_static_asset_path, spa_handler, static_asset_handler
from litestar_nextjs.manifest import load_route_table
from litestar_nextjs.resolver import SPAResolver
from litestar_nextjs.route_table import RouteTable, split_path
from litestar_nextjs.utils import is_within_directory, root_request_path

if TYPE_CHECKING:
    from litestar_nextjs.config import NextJSConfig

__all__ = ("AppHandler",)

logger = logging.getLogger("litestar_nextjs")


class AppHandler:
    """Handler for serving pages of a static Next.js export."""

    __slots__ = ("_config", "_init_lock", "_initialized", "_resolver")

    def __init__(self, config: "NextJSConfig") -> None:
        """Initialize the SPA handler.

        Args:
            config: The Next.js configuration.
        """
        self._config = config
        self._initialized = False
        self._init_lock = anyio.Lock()
        self._resolver = SPAResolver(
            route_table=RouteTable().freeze(),
            static_resources_location=os.fspath(config.static_resources_location),
            index_file=os.fspath(config.index_file),
            wildcards=config.wildcards,
        )

    @property
    def is_initialized(self) -> bool:
        """Whether the route table has been loaded.

        Returns:
            True when initialized, otherwise False.
        """
        return self._initialized

    @property
    def config(self) -> "NextJSConfig":
        """The Next.js configuration this handler serves."""
        return self._config

    @property
    def route_table(self) -> RouteTable:
        """The route table requests are resolved against."""
        return self._resolver.route_table

    @property
    def resolver(self) -> SPAResolver:
        """The resolver for page requests, replaced once the route table is built."""
        return self._resolver

    @property
    def asset_prefix(self) -> "str | None":
        """URL prefix of the static resources mount, or None when mounted at ``/``."""
        return self._config.static_resources_mount.rstrip("/") or None

    async def initialize_async(self) -> None:
        """Build the route table from the build manifest.

        Runs once, even when called concurrently; later calls are no-ops.
        """
        if self._initialized:
            return

        async with self._init_lock:
            if self._initialized:
                return
            route_table = await load_route_table(self._resolver.static_resources_location)
            self._resolver = SPAResolver(
                route_table=route_table,
                static_resources_location=self._resolver.static_resources_location,
                index_file=self._resolver.index_file,
                wildcards=self._resolver.wildcards,
            )
            self._initialized = True

    async def _ensure_initialized(self) -> None:
        if not self._initialized:
            logger.warning(
                "AppHandler lazy init triggered - lifespan may not have run. "
                "Ensure NextJSPlugin is registered on the application."
            )
            await self.initialize_async()

    async def get_file_path(self, request_path: str) -> str:
        """Get the file that answers a request.

        Args:
            request_path: Path of the incoming request.

        Returns:
            Path of a static asset, resolved page, or the index file.
        """
        await self._ensure_initialized()

        if self._config.serves_assets_at_root:
            asset = await self._find_static_asset(request_path)
            if asset is not None:
                return asset

        return await self._resolver.resolve(request_path)

    async def get_asset_file_path(self, request_path: str) -> str:
        """Get the file that answers a request below the static resources mount.

        Args:
            request_path: Path of the incoming request, including the mount prefix.

        Returns:
            Path of the static asset, or whatever the full request path resolves to.
        """
        await self._ensure_initialized()

        prefix = self.asset_prefix
        if prefix is not None and is_static_asset_path(request_path, prefix):
            asset = await self._find_static_asset(request_path[len(prefix) :])
            if asset is not None:
                return asset

        return await self._resolver.resolve(request_path)

    async def _find_static_asset(self, relative_path: str) -> "str | None":
        """Find a regular file at exactly ``relative_path`` under the static resources location.

        Returns:
            The file path, or None if the path does not name an existing file.
        """
        if not split_path(relative_path):
            return None
        location = self._resolver.static_resources_location
        candidate = root_request_path(relative_path, location)
        if not is_within_directory(candidate, location):
            return None
        try:
            if await anyio.Path(candidate).is_file():
                return candidate
        except (OSError, ValueError):
            return None
        return None

    def _route_opt(self) -> "dict[str, Any]":
        opt: dict[str, Any] = {"_nextjs_spa_handler": self}
        if self._config.exclude_from_auth:
            opt["exclude_from_auth"] = True
        return opt

    def create_route_handler(self) -> Any:
        """Create a Litestar route handler for the SPA.

        Returns:
            A Litestar route handler suitable for registering on an application.
        """
        return get(
            path=["/", "/{path:path}"],
            name=self._config.route_name,
            opt=self._route_opt(),
            include_in_schema=False,
        )(spa_handler)

    def create_asset_route_handler(self) -> Any:
        """Create a Litestar route handler for the static resources mount.

        Raises:
            ValueError: If static resources are mounted at ``/``, where the SPA route serves them.

        Returns:
            A route handler for ``<mount>`` and everything below it.
        """
        prefix = self.asset_prefix
        if prefix is None:
            msg = "Static resources mounted at '/' are served by the SPA route handler."
            raise ValueError(msg)

        return get(
            path=[prefix, f"{prefix}/{{path:path}}"],
            name=f"{self._config.route_name}_static",
            opt=self._route_opt(),
            include_in_schema=False,
        )(static_asset_handler)
