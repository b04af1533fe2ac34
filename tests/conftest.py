from collections.abc import Generator
from pathlib import Path

import pytest

from litestar_nextjs.config import NextJSConfig

here = Path(__file__).parent


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def fixtures_path() -> Generator[Path, None, None]:
    yield here / "fixtures"


@pytest.fixture
def export_dir(fixtures_path: Path) -> Generator[Path, None, None]:
    """A static export with a build manifest, pages, dynamic routes and assets."""
    yield fixtures_path / "001"


@pytest.fixture
def wildcard_export_dir(fixtures_path: Path) -> Generator[Path, None, None]:
    """A static export with dynamic-route pages but no build manifest."""
    yield fixtures_path / "002"


@pytest.fixture
def no_manifest_dir(fixtures_path: Path) -> Generator[Path, None, None]:
    yield fixtures_path / "no_manifest"


@pytest.fixture
def nextjs_config(export_dir: Path) -> Generator[NextJSConfig, None, None]:
    yield NextJSConfig(
        index_file=export_dir / "index.html",
        static_resources_location=export_dir,
    )
