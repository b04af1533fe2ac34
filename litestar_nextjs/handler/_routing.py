"""SPA route handlers and routing helpers."""

import logging
import os
from contextlib import suppress
from typing import TYPE_CHECKING, Any, cast

from litestar.exceptions import ImproperlyConfiguredException
from litestar.response import File

if TYPE_CHECKING:
    from litestar.connection import Request

    from litestar_nextjs.handler._app import AppHandler

logger = logging.getLogger("litestar_nextjs")


def is_static_asset_path(request_path: str, asset_prefix: "str | None") -> bool:
    """Check if a request path targets static assets rather than SPA routes.

    Args:
        request_path: Incoming request path.
        asset_prefix: Normalized asset URL prefix (e.g., ``/static``) or None.

    Returns:
        True when ``request_path`` matches the asset prefix (or a descendant path), otherwise False.
    """
    if not asset_prefix:
        return False
    return request_path == asset_prefix or request_path.startswith(f"{asset_prefix}/")


def get_route_opt(request: "Request[Any, Any, Any]") -> "dict[str, Any] | None":
    """Return the current route handler opt dict when available.

    Returns:
        The route handler ``opt`` mapping, or None if unavailable.
    """
    route_handler = request.scope.get("route_handler")  # pyright: ignore[reportUnknownMemberType]
    with suppress(AttributeError):
        opt_any = cast("Any", route_handler).opt
        return cast("dict[str, Any] | None", opt_any)
    return None  # pragma: no cover


def get_spa_handler_from_request(request: "Request[Any, Any, Any]") -> "AppHandler":
    """Resolve the SPA handler instance for the current request.

    This is stored on the route handler's ``opt`` when the route is created.

    Raises:
        ImproperlyConfiguredException: If the SPA handler is not available on the route metadata.

    Returns:
        The configured SPA handler instance.
    """
    opt = get_route_opt(request)
    handler = opt.get("_nextjs_spa_handler") if opt is not None else None
    if handler is None:
        msg = "SPA handler is not available for this route. Ensure AppHandler.create_route_handler() was used."
        raise ImproperlyConfiguredException(msg)
    return cast("AppHandler", handler)


def file_response(file_path: str) -> File:
    """Build an inline file response.

    The media type is guessed from the file name.

    Returns:
        The response streaming ``file_path``.
    """
    return File(path=file_path, filename=os.path.basename(file_path), content_disposition_type="inline")


async def spa_handler(request: "Request[Any, Any, Any]") -> File:
    """Serve the file a request path resolves to.

    Returns:
        The resolved page, static asset, or index file.
    """
    path = request.url.path
    logger.debug("Received request for path: %s", path)

    handler = get_spa_handler_from_request(request)
    return file_response(await handler.get_file_path(path))


async def static_asset_handler(request: "Request[Any, Any, Any]") -> File:
    """Serve a file below the static resources mount.

    Misses fall through to page resolution, so they end at the index file rather than a 404.

    Returns:
        The static asset, or the file the request path resolves to.
    """
    path = request.url.path
    logger.debug("Received static asset request for path: %s", path)

    handler = get_spa_handler_from_request(request)
    return file_response(await handler.get_asset_file_path(path))
