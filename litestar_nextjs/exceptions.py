"""Litestar-NextJS exception classes."""

__all__ = [
    "BuildManifestNotFoundError",
    "GlobPatternError",
    "LitestarNextJSError",
    "ManifestReadError",
    "ServeFileError",
]


class LitestarNextJSError(Exception):
    """Base exception for Litestar-NextJS related errors."""


class BuildManifestNotFoundError(LitestarNextJSError):
    """Raised when no ``_buildManifest.js`` is found under the static resources location."""

    def __init__(self, pattern: str) -> None:
        """Initialize the exception.

        Args:
            pattern: The glob pattern that produced no match.
        """
        super().__init__(f"Build manifest not found (searched {pattern!r}). Did you forget to run `next build`?")
        self.pattern = pattern


class GlobPatternError(LitestarNextJSError):
    """Raised when a glob search pattern cannot be evaluated."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Glob pattern error for {pattern!r}: {reason}")
        self.pattern = pattern


class ManifestReadError(LitestarNextJSError):
    """Raised when the build manifest exists but cannot be read."""

    def __init__(self, manifest_path: str, reason: str) -> None:
        super().__init__(f"File system error reading build manifest at {manifest_path!r}: {reason}")
        self.manifest_path = manifest_path


class ServeFileError(LitestarNextJSError):
    """Raised when neither the resolved file nor the index file can be served."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(f"Failed to serve file {file_path!r}: {reason}")
        self.file_path = file_path
