"""Route table with trie-based path matching.

Patterns use ``:name`` for a parameter that matches exactly one path segment::

    table = RouteTable()
    table.insert("/", "out/index.html")
    table.insert("/blog/:slug", "out/blog/[slug].html")
    table.freeze()

    match = table.find("/blog/hello-world")
    match.value  # "out/blog/[slug].html"
    match.pattern  # "/blog/:slug"
    match.params  # {"slug": "hello-world"}

Static segments take precedence over parameters at the same depth, and lookup
backtracks when a static branch dead-ends.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

__all__ = ("PARAM_MARKER", "RouteMatch", "RouteTable", "split_path")

logger = logging.getLogger("litestar_nextjs")

PARAM_MARKER = ":"


def split_path(path: str) -> list[str]:
    """Split a path into its non-empty segments.

    Returns:
        The path segments, ``[]`` for the root path.
    """
    return [part for part in path.split("/") if part]


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route table lookup."""

    value: str
    """The file path stored for the matched pattern."""
    pattern: str
    """The pattern that matched the request path."""
    params: dict[str, str] = field(default_factory=dict)
    """Parameter bindings captured from the request path."""


class _TrieNode:
    """A node in the route trie."""

    __slots__ = ("children", "param_child", "pattern", "value")

    def __init__(self) -> None:
        self.children: dict[str, _TrieNode] = {}
        # A single parameter edge per depth; patterns differing only in
        # parameter names share it.
        self.param_child: _TrieNode | None = None
        self.pattern: str | None = None
        self.value: str | None = None


class RouteTable:
    """Ordered mapping of route patterns to file paths, matched segment by segment.

    The table is populated once and then frozen. A frozen table is never
    mutated, so it can be shared across concurrent requests without locking.
    """

    __slots__ = ("_frozen", "_patterns", "_root")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._patterns: dict[str, str] = {}
        self._frozen = False

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self) -> Iterator[str]:
        return iter(self._patterns)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._patterns

    def __repr__(self) -> str:
        return f"RouteTable({self._patterns!r})"

    @property
    def is_frozen(self) -> bool:
        """Whether the table rejects further insertions."""
        return self._frozen

    def items(self) -> "list[tuple[str, str]]":
        """Return ``(pattern, value)`` pairs in insertion order."""
        return list(self._patterns.items())

    def get(self, pattern: str) -> "str | None":
        """Return the value stored for an exact pattern string.

        Args:
            pattern: A pattern exactly as it was inserted.

        Returns:
            The stored file path, or None when the pattern is unknown.
        """
        return self._patterns.get(pattern)

    def insert(self, pattern: str, value: str) -> None:
        """Insert a pattern, overwriting any previous value for it.

        Two patterns that differ only in parameter names (``/a/:id`` and
        ``/a/:slug``) occupy the same slot; the later insertion wins.

        Args:
            pattern: Route pattern such as ``/items/:id``.
            value: File path to associate with the pattern.

        Raises:
            RuntimeError: If the table has been frozen.
        """
        if self._frozen:
            msg = "Cannot insert routes into a frozen route table."
            raise RuntimeError(msg)

        node = self._root
        for segment in split_path(pattern):
            if segment.startswith(PARAM_MARKER):
                if node.param_child is None:
                    node.param_child = _TrieNode()
                node = node.param_child
            else:
                node = node.children.setdefault(segment, _TrieNode())

        if node.pattern is not None and node.pattern != pattern:
            logger.debug("Route pattern %r replaces %r", pattern, node.pattern)
            del self._patterns[node.pattern]
        node.pattern = pattern
        node.value = value
        self._patterns[pattern] = value

    def freeze(self) -> "RouteTable":
        """Make the table read-only.

        Returns:
            The table itself, for chaining.
        """
        self._frozen = True
        return self

    def find(self, path: str) -> "RouteMatch | None":
        """Find the most specific pattern matching a concrete request path.

        Args:
            path: Request path such as ``/blog/hello``.

        Returns:
            The match, or None if no pattern matches.
        """
        parts = split_path(path)
        node = self._match_node(self._root, parts, 0)
        if node is None or node.pattern is None or node.value is None:
            return None

        params = {
            segment[len(PARAM_MARKER) :]: part
            for segment, part in zip(split_path(node.pattern), parts)
            if segment.startswith(PARAM_MARKER)
        }
        return RouteMatch(value=node.value, pattern=node.pattern, params=params)

    def _match_node(self, node: _TrieNode, parts: list[str], index: int) -> "_TrieNode | None":
        """Recursively match path parts against the trie."""
        if index == len(parts):
            return node if node.pattern is not None else None

        part = parts[index]

        child = node.children.get(part)
        if child is not None:
            result = self._match_node(child, parts, index + 1)
            if result is not None:
                return result

        if node.param_child is not None:
            return self._match_node(node.param_child, parts, index + 1)

        return None
