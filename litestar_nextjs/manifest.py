"""Next.js build manifest discovery and parsing.

A static export contains ``_next/<build id>/_buildManifest.js``, a small
script that assigns an object literal mapping every page route to its
JavaScript chunks::

    self.__BUILD_MANIFEST = {"/": ["static/chunks/pages/index.js"], "/blog/[slug]": [...], ...}

The routes are pulled out of that text with a regular expression rather than
a JavaScript parser. Text that does not fit the expected shape is skipped.
"""

import glob
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import anyio.to_thread

from litestar_nextjs.exceptions import (
    BuildManifestNotFoundError,
    LitestarNextJSError,
    ManifestReadError,
)
from litestar_nextjs.route_table import PARAM_MARKER, RouteTable
from litestar_nextjs.utils import HTML_SUFFIX, first_glob_match

__all__ = (
    "BUILD_MANIFEST_GLOB",
    "ManifestEntry",
    "convert_dynamic_path",
    "find_and_parse_build_manifest",
    "find_build_manifest",
    "iter_manifest_entries",
    "load_route_table",
    "parse_build_manifest",
    "read_build_manifest",
)

logger = logging.getLogger("litestar_nextjs")

BUILD_MANIFEST_GLOB = "_next/**/_buildManifest.js"

_ENTRY_RE = re.compile(r'"([^,]+)":\s*\["[^,]+"\]')
# ``[id]``, ``[...slug]`` and ``[[...slug]]`` all collapse to one named segment.
_DYNAMIC_SEGMENT_RE = re.compile(r"\[+(?:\.\.\.)?(?P<param>[^\[\]]+?)\]+")


@dataclass(frozen=True, slots=True)
class ManifestEntry:
    """A route declared in the build manifest."""

    route: str
    """Route as written by Next.js, e.g. ``/blog/[slug]``."""
    file_path: str
    """Exported HTML file for the route, rooted at the static resources location."""

    @property
    def pattern(self) -> str:
        """The route converted to route table syntax."""
        return convert_dynamic_path(self.route).replace(HTML_SUFFIX, "")


def convert_dynamic_path(path: str) -> str:
    """Convert Next.js dynamic segments to ``:param`` syntax.

    Example::

        convert_dynamic_path("/blog/[slug]")  # "/blog/:slug"
        convert_dynamic_path("/docs/[...path]")  # "/docs/:path"

    Returns:
        The converted path.
    """
    return _DYNAMIC_SEGMENT_RE.sub(lambda match: f"{PARAM_MARKER}{match['param']}", path)


def route_to_file_path(route: str, static_resources_location: str) -> str:
    """Map a manifest route to its exported HTML file.

    Returns:
        ``<location>/index.html`` for ``/``, else ``<location>/<route>.html``.
    """
    name = "index" if route == "/" else route.removeprefix("/")
    return str(Path(static_resources_location) / f"{name}{HTML_SUFFIX}")


def iter_manifest_entries(build_manifest: str, static_resources_location: str) -> Iterator[ManifestEntry]:
    """Yield the route declarations found in manifest text.

    Args:
        build_manifest: Contents of ``_buildManifest.js``.
        static_resources_location: Root directory of the static export.

    Yields:
        One entry per ``"<route>": ["<chunk>"]`` occurrence.
    """
    for match in _ENTRY_RE.finditer(build_manifest):
        route = match.group(1)
        yield ManifestEntry(route=route, file_path=route_to_file_path(route, static_resources_location))


def parse_build_manifest(build_manifest: str, static_resources_location: str) -> RouteTable:
    """Build a route table from manifest text.

    Later entries overwrite earlier ones that convert to the same pattern.

    Args:
        build_manifest: Contents of ``_buildManifest.js``.
        static_resources_location: Root directory of the static export.

    Returns:
        The populated, frozen route table.
    """
    table = RouteTable()
    for entry in iter_manifest_entries(build_manifest, static_resources_location):
        table.insert(entry.pattern, entry.file_path)

    logger.debug("Build manifest parsed successfully (%d routes)", len(table))
    return table.freeze()


def find_build_manifest(static_resources_location: str) -> Path:
    """Locate ``_buildManifest.js`` under the static resources location.

    Args:
        static_resources_location: Root directory of the static export.

    Raises:
        BuildManifestNotFoundError: If no manifest matches.
        GlobPatternError: If the search pattern is malformed.

    Returns:
        Path to the first manifest found.
    """
    pattern = f"{glob.escape(static_resources_location.rstrip('/'))}/{BUILD_MANIFEST_GLOB}"
    try:
        match = first_glob_match(pattern)
    except LitestarNextJSError as exc:
        logger.error("Failed to read glob pattern: %s: %s", pattern, exc)
        raise
    if match is None:
        raise BuildManifestNotFoundError(pattern)
    return Path(match)


def read_build_manifest(manifest_path: Path) -> str:
    """Read manifest text.

    Raises:
        ManifestReadError: If the file cannot be read or is not valid UTF-8.

    Returns:
        The manifest contents.
    """
    try:
        return manifest_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestReadError(str(manifest_path), str(exc)) from exc


def find_and_parse_build_manifest(static_resources_location: str) -> RouteTable:
    """Find, read and parse the build manifest.

    Raises:
        LitestarNextJSError: If the manifest is missing or unreadable.

    Returns:
        The route table described by the manifest.
    """
    manifest_path = find_build_manifest(static_resources_location)
    return parse_build_manifest(read_build_manifest(manifest_path), static_resources_location)


async def load_route_table(static_resources_location: str) -> RouteTable:
    """Build the route table without blocking the event loop.

    Manifest problems are never fatal: they are logged and an empty table is
    returned, so every request falls through to the index file.

    Returns:
        A frozen route table.
    """
    try:
        return await anyio.to_thread.run_sync(find_and_parse_build_manifest, static_resources_location)
    except LitestarNextJSError as exc:
        logger.warning("Failed to parse build manifest: %s. Using an empty route table.", exc)
        return RouteTable().freeze()
