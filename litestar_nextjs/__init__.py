"""Litestar-NextJS: serve static Next.js exports from Litestar.

This package resolves request paths against a ``next build`` static export:
pages listed in the build manifest, dynamic routes such as ``/blog/[slug]``,
static assets, and an index document for everything else.

Basic usage:
    from litestar import Litestar
    from litestar_nextjs import NextJSConfig, NextJSPlugin

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

Resolving paths without a running application:
    from litestar_nextjs import SPAResolver, find_and_parse_build_manifest

    resolver = SPAResolver(
        route_table=find_and_parse_build_manifest("out"),
        static_resources_location="out",
        index_file="out/index.html",
    )
    file_path = await resolver.resolve("/blog/hello-world")
"""

from litestar_nextjs.config import NextJSConfig
from litestar_nextjs.exceptions import (
    BuildManifestNotFoundError,
    GlobPatternError,
    LitestarNextJSError,
    ManifestReadError,
    ServeFileError,
)
from litestar_nextjs.handler import AppHandler
from litestar_nextjs.manifest import find_and_parse_build_manifest, load_route_table, parse_build_manifest
from litestar_nextjs.plugin import NextJSPlugin
from litestar_nextjs.resolver import SPAResolver
from litestar_nextjs.route_table import RouteMatch, RouteTable

__all__ = (
    "AppHandler",
    "BuildManifestNotFoundError",
    "GlobPatternError",
    "LitestarNextJSError",
    "ManifestReadError",
    "NextJSConfig",
    "NextJSPlugin",
    "RouteMatch",
    "RouteTable",
    "SPAResolver",
    "ServeFileError",
    "find_and_parse_build_manifest",
    "load_route_table",
    "parse_build_manifest",
)
