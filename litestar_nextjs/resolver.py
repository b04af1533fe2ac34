"""Resolve request paths to files in a static Next.js export."""

import glob
import logging
from dataclasses import dataclass

import anyio
import anyio.to_thread

from litestar_nextjs.exceptions import GlobPatternError, ServeFileError
from litestar_nextjs.route_table import RouteTable, split_path
from litestar_nextjs.utils import (
    HTML_SUFFIX,
    construct_file_path,
    convert_to_wildcard_path,
    first_glob_match,
    is_within_directory,
    root_request_path,
)

__all__ = ("SPAResolver",)

logger = logging.getLogger("litestar_nextjs")


async def _can_open(file_path: str) -> bool:
    try:
        async with await anyio.open_file(file_path, "rb"):
            return True
    except (OSError, ValueError):
        return False


@dataclass(frozen=True)
class SPAResolver:
    """Map request paths to the HTML file that should answer them.

    Resolution order:

    1. The route table built from the build manifest.
    2. With ``wildcards`` enabled, a glob search that treats numeric segments
       as dynamic, so ``/items/42`` can find ``<root>/items/[id].html``.
    3. The raw request path, e.g. ``/about`` -> ``<root>/about.html``.
    4. The index file, when none of the above can be opened.

    The resolver holds no mutable state and can be shared by every request.
    """

    route_table: RouteTable
    static_resources_location: str
    index_file: str
    wildcards: bool = False

    async def resolve(self, request_path: str) -> str:
        """Resolve a request path to an openable file.

        Args:
            request_path: Path of the incoming request.

        Raises:
            ServeFileError: If the index file is needed but cannot be opened.

        Returns:
            The path of the file to serve.
        """
        logger.debug("Serving default SPA page for path: %s", request_path)

        candidate = await self.candidate_path(request_path)
        if candidate is not None and await _can_open(candidate):
            return candidate

        logger.debug("No file for %s (tried %s), falling back to %s", request_path, candidate, self.index_file)
        try:
            async with await anyio.open_file(self.index_file, "rb"):
                pass
        except OSError as exc:
            raise ServeFileError(self.index_file, str(exc)) from exc
        return self.index_file

    async def candidate_path(self, request_path: str) -> "str | None":
        """Compute the file that should answer a request, without opening it.

        Returns:
            The constructed file path, or None if the request path escapes the
            static resources location.
        """
        match = self.route_table.find(request_path)
        if match is not None:
            return construct_file_path(match.value, self.static_resources_location)

        if self.wildcards and split_path(request_path):
            matched = await self._find_wildcard_file(request_path)
            if matched is not None:
                return construct_file_path(matched, self.static_resources_location)

        # Raw request paths are always rooted, even when they end in ``.html``.
        rooted = root_request_path(request_path, self.static_resources_location)
        if not is_within_directory(rooted, self.static_resources_location):
            return None
        return rooted if rooted.endswith(HTML_SUFFIX) else f"{rooted}{HTML_SUFFIX}"

    async def _find_wildcard_file(self, request_path: str) -> "str | None":
        wildcard_path = convert_to_wildcard_path(request_path.strip("/"))
        pattern = f"{glob.escape(self.static_resources_location.rstrip('/'))}/{wildcard_path}{HTML_SUFFIX}"
        try:
            matched = await anyio.to_thread.run_sync(first_glob_match, pattern)
        except GlobPatternError as exc:
            logger.debug("Skipping wildcard search for %s: %s", request_path, exc)
            return None
        if matched is None or not is_within_directory(matched, self.static_resources_location):
            return None
        return matched
