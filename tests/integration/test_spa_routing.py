"""End-to-end routing tests for a Litestar app serving a Next.js export."""

from pathlib import Path

import pytest
from litestar import Litestar, get
from litestar.testing import AsyncTestClient

from litestar_nextjs import NextJSConfig, NextJSPlugin

pytestmark = pytest.mark.anyio


@pytest.fixture
def app(nextjs_config: NextJSConfig) -> Litestar:
    @get("/api/health", sync_to_thread=False)
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return Litestar(route_handlers=[health], plugins=[NextJSPlugin(config=nextjs_config)])


async def test_returns_index(app: Litestar) -> None:
    async with AsyncTestClient(app=app) as client:
        response = await client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Home page" in response.text


async def test_returns_page(app: Litestar) -> None:
    async with AsyncTestClient(app=app) as client:
        response = await client.get("/page")

    assert response.status_code == 200
    assert "Sample Page" in response.text


async def test_returns_page_inline(app: Litestar) -> None:
    async with AsyncTestClient(app=app) as client:
        response = await client.get("/page")

    assert response.headers["content-disposition"].startswith("inline")


async def test_returns_item_page(app: Litestar) -> None:
    async with AsyncTestClient(app=app) as client:
        response = await client.get("/dog/items/cat")

    assert response.status_code == 200
    assert "Item Page" in response.text


async def test_returns_dynamic_blog_page(app: Litestar) -> None:
    async with AsyncTestClient(app=app) as client:
        response = await client.get("/blog/hello-world")

    assert response.status_code == 200
    assert "Blog Post" in response.text


async def test_unknown_page_returns_index(app: Litestar) -> None:
    async with AsyncTestClient(app=app) as client:
        unknown = await client.get("/fsociety")
        root = await client.get("/")

    assert unknown.status_code == 200
    assert "Home page" in unknown.text
    assert unknown.content == root.content


async def test_returns_assets(app: Litestar) -> None:
    async with AsyncTestClient(app=app) as client:
        response = await client.get("/next.svg")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert '<svg xmlns="http://www.w3.org/2000/svg" fill="none"' in response.text


@pytest.mark.parametrize(
    ("path", "media_type", "body"),
    [
        ("/", "text/html", "Home page"),
        ("/page", "text/html", "Sample Page"),
        ("/blog/x", "text/html", "Blog Post"),
        ("/dog/items/cat", "text/html", "Item Page"),
        ("/fsociety", "text/html", "Home page"),
        ("/next.svg", "image/svg+xml", "<svg"),
    ],
)
async def test_responses_carry_media_type(app: Litestar, path: str, media_type: str, body: str) -> None:
    async with AsyncTestClient(app=app) as client:
        response = await client.get(path)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith(media_type)
    assert body in response.text


async def test_application_routes_take_precedence(app: Litestar) -> None:
    async with AsyncTestClient(app=app) as client:
        response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_repeated_requests_are_identical(app: Litestar) -> None:
    async with AsyncTestClient(app=app) as client:
        first = await client.get("/dog/items/cat")
        second = await client.get("/dog/items/cat")

    assert first.content == second.content


async def test_route_table_built_on_startup(nextjs_config: NextJSConfig) -> None:
    plugin = NextJSPlugin(config=nextjs_config)
    app = Litestar(plugins=[plugin])

    assert plugin.spa_handler is not None
    assert not plugin.spa_handler.is_initialized

    async with AsyncTestClient(app=app):
        assert plugin.spa_handler.is_initialized
        assert list(plugin.spa_handler.route_table) == ["/", "/_error", "/page", "/blog/:slug", "/:slug/items/:id"]


async def test_returns_dynamic_numeric_page(wildcard_export_dir: Path) -> None:
    config = NextJSConfig(
        index_file=wildcard_export_dir / "index.html",
        static_resources_location=wildcard_export_dir,
        wildcards=True,
    )
    app = Litestar(plugins=[NextJSPlugin(config=config)])

    async with AsyncTestClient(app=app) as client:
        item = await client.get("/1/items/1")
        product = await client.get("/products/42")
        unknown = await client.get("/products/shoes")

    assert "Item Page" in item.text
    assert "Product Page" in product.text
    assert "Wildcard home" in unknown.text


async def test_returns_dynamic_character_page_with_wildcards(export_dir: Path) -> None:
    config = NextJSConfig(
        index_file=export_dir / "index.html",
        static_resources_location=export_dir,
        wildcards=True,
    )
    app = Litestar(plugins=[NextJSPlugin(config=config)])

    async with AsyncTestClient(app=app) as client:
        response = await client.get("/3b2b6d56-e85b-432d-b555-7113b810a3b7/items/1")

    assert response.status_code == 200
    assert "Item Page" in response.text


async def test_handles_build_manifest_not_found(export_dir: Path, no_manifest_dir: Path) -> None:
    config = NextJSConfig(index_file=export_dir / "index.html", static_resources_location=no_manifest_dir)
    app = Litestar(plugins=[NextJSPlugin(config=config)])

    async with AsyncTestClient(app=app) as client:
        responses = [await client.get(path) for path in ("/", "/page", "/blog/post", "/fsociety")]

    for response in responses:
        assert response.status_code == 200
        assert "Home page" in response.text


async def test_missing_index_file_fails_only_that_request(tmp_path: Path) -> None:
    (tmp_path / "about.html").write_text("<h1>About</h1>")
    config = NextJSConfig(index_file=tmp_path / "index.html", static_resources_location=tmp_path)
    app = Litestar(plugins=[NextJSPlugin(config=config)])

    async with AsyncTestClient(app=app) as client:
        missing = await client.get("/nowhere")
        about = await client.get("/about")

    assert missing.status_code == 500
    assert about.status_code == 200
    assert "About" in about.text


async def test_prefixed_static_mount(export_dir: Path) -> None:
    config = NextJSConfig(
        index_file=export_dir / "index.html",
        static_resources_location=export_dir,
        static_resources_mount="/static",
    )
    app = Litestar(plugins=[NextJSPlugin(config=config)])

    async with AsyncTestClient(app=app) as client:
        asset = await client.get("/static/next.svg")
        page = await client.get("/page")
        unmounted_asset = await client.get("/next.svg")

    assert asset.status_code == 200
    assert asset.headers["content-type"].startswith("image/svg+xml")
    assert "<svg" in asset.text
    assert "Sample Page" in page.text
    assert "Home page" in unmounted_asset.text


@pytest.mark.parametrize("path", ["/static/missing.svg", "/static", "/static/", "/static/blog"])
async def test_prefixed_static_mount_misses_fall_back_to_index(export_dir: Path, path: str) -> None:
    config = NextJSConfig(
        index_file=export_dir / "index.html",
        static_resources_location=export_dir,
        static_resources_mount="/static",
    )
    app = Litestar(plugins=[NextJSPlugin(config=config)])

    async with AsyncTestClient(app=app) as client:
        response = await client.get(path)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Home page" in response.text
