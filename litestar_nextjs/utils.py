"""Path helpers for resolving requests against a static export."""

import glob
import os
import re

from litestar_nextjs.exceptions import GlobPatternError

__all__ = (
    "HTML_SUFFIX",
    "WILDCARD",
    "construct_file_path",
    "convert_to_wildcard_path",
    "first_glob_match",
    "is_within_directory",
    "root_request_path",
)

HTML_SUFFIX = ".html"
WILDCARD = "*"

_UNSIGNED_INTEGER_RE = re.compile(r"\+?[0-9]+")
_U32_MAX = 2**32 - 1


def _is_unsigned_integer(segment: str) -> bool:
    return _UNSIGNED_INTEGER_RE.fullmatch(segment) is not None and int(segment) <= _U32_MAX


def convert_to_wildcard_path(file_path: str) -> str:
    """Replace numeric path segments with a single-segment glob wildcard.

    Non-numeric segments are glob-escaped so they only match literally.

    Example::

        convert_to_wildcard_path("/1/items/42")  # "/*/items/*"

    Args:
        file_path: A request path.

    Returns:
        The path as a glob pattern.
    """
    return "/".join(
        WILDCARD if _is_unsigned_integer(segment) else glob.escape(segment) for segment in file_path.split("/")
    )


def root_request_path(request_path: str, static_resources_location: str) -> str:
    """Place a raw request path under the static resources location.

    Returns:
        ``<location>/<request path>`` with duplicate separators removed.
    """
    return f"{static_resources_location.rstrip('/')}/{request_path.strip('/')}"


def construct_file_path(file_path: str, static_resources_location: str) -> str:
    """Construct the final file path for a resolved request.

    Paths that already contain a wildcard or end in ``.html`` are concrete and
    returned verbatim; anything else gets ``.html`` appended and is rooted at
    the static resources location.

    Args:
        file_path: The working resolution for a request.
        static_resources_location: Root directory of the static export.

    Returns:
        The path to open.
    """
    if WILDCARD in file_path or file_path.endswith(HTML_SUFFIX):
        return file_path
    return f"{static_resources_location.rstrip('/')}/{file_path.strip('/')}{HTML_SUFFIX}"


def is_within_directory(path: str, directory: str) -> bool:
    """Check that ``path`` does not escape ``directory`` once normalized.

    Symlinks are not resolved.

    Returns:
        True when ``path`` is ``directory`` or lies beneath it.
    """
    base = os.path.abspath(directory)
    target = os.path.abspath(path)
    try:
        return os.path.commonpath([base, target]) == base
    except ValueError:
        return False


def first_glob_match(pattern: str) -> "str | None":
    """Return the first path matching a recursive glob pattern, in sorted order.

    Raises:
        GlobPatternError: If the pattern cannot be evaluated.

    Returns:
        The first match, or None if nothing matches.
    """
    try:
        matches = sorted(glob.iglob(pattern, recursive=True))
    except (ValueError, re.error) as exc:
        raise GlobPatternError(pattern, str(exc)) from exc
    return matches[0] if matches else None
