"""SPA handler public API.

This package provides the AppHandler for serving a static Next.js export.
"""

from litestar_nextjs.handler._app import AppHandler

__all__ = ("AppHandler",)
