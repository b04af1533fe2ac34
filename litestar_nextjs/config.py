"""Configuration for serving a static Next.js export."""

import os
from dataclasses import dataclass, field

from litestar.exceptions import ImproperlyConfiguredException

__all__ = ("NextJSConfig",)


@dataclass
class NextJSConfig:
    """Configuration for Next.js static export support.

    To enable the integration, pass an instance of this class to
    :class:`NextJSPlugin <litestar_nextjs.plugin.NextJSPlugin>` and add the plugin
    to the :class:`Litestar <litestar.app.Litestar>` constructor using the
    ``plugins`` key.

    Example::

        app = Litestar(
            plugins=[
                NextJSPlugin(
                    config=NextJSConfig(
                        index_file="out/index.html",
                        static_resources_location="out",
                    )
                )
            ],
        )
    """

    index_file: "str | os.PathLike[str]" = field(default="./index.html")
    """The document served when a request resolves to no other file."""
    static_resources_mount: str = field(default="/")
    """URL prefix that static assets (images, scripts, styles) are served under."""
    static_resources_location: "str | os.PathLike[str]" = field(default="./")
    """Directory containing the output of ``next build`` with ``output: "export"``.

    The build manifest is searched for at ``<location>/_next/**/_buildManifest.js``.
    """
    wildcards: bool = False
    """Resolve unknown paths with numeric segments by globbing for dynamic-route files.

    With this enabled, ``/items/42`` can be served by ``<location>/items/[id].html`` even
    when ``/items/[id]`` is missing from the build manifest.
    """
    exclude_from_auth: bool = True
    """Mark the SPA and static routes with ``exclude_from_auth`` in their ``opt``."""
    route_name: str = "nextjs_spa"
    """Name of the SPA route handler."""

    def __post_init__(self) -> None:
        """Normalize paths and validate the mount prefix.

        Raises:
            ImproperlyConfiguredException: If the mount prefix is not absolute.
        """
        self.index_file = os.fspath(self.index_file)
        self.static_resources_location = os.fspath(self.static_resources_location) or "."
        if not self.static_resources_mount.startswith("/"):
            msg = f"static_resources_mount must start with '/', got {self.static_resources_mount!r}"
            raise ImproperlyConfiguredException(msg)

    @property
    def serves_assets_at_root(self) -> bool:
        """Whether static assets share the root URL namespace with SPA pages."""
        return self.static_resources_mount.rstrip("/") == ""
