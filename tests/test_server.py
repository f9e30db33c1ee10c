"""Tests for the preview server."""

from pathlib import Path
from typing import Any

import pytest
from aiohttp import web
from docweave.server import create_app, site_dir_key


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """Create a small built site."""
    site = tmp_path / "site"
    (site / "guide").mkdir(parents=True)
    (site / "static" / "css").mkdir(parents=True)
    (site / "index.html").write_text("<h1>Home</h1>", encoding="utf-8")
    (site / "guide" / "index.html").write_text("<h1>Guide</h1>", encoding="utf-8")
    (site / "static" / "css" / "base.css").write_text("body {}", encoding="utf-8")
    (tmp_path / "secret.txt").write_text("secret", encoding="utf-8")
    return site


@pytest.fixture
def app(site_dir: Path) -> web.Application:
    return create_app(site_dir)


class TestCreateApp:
    """Tests for create_app()."""

    def test__stores_resolved_site_dir(self, site_dir: Path) -> None:
        app = create_app(site_dir)

        assert app[site_dir_key] == site_dir.resolve()


class TestServeSiteFile:
    """Tests for static file serving."""

    @pytest.mark.asyncio
    async def test__root__serves_index_html(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/")

        assert response.status == 200
        assert "text/html" in response.headers["Content-Type"]
        assert await response.text() == "<h1>Home</h1>"

    @pytest.mark.asyncio
    async def test__directory__serves_its_index(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/guide/")

        assert response.status == 200
        assert await response.text() == "<h1>Guide</h1>"

    @pytest.mark.asyncio
    async def test__static_file__served(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/static/css/base.css")

        assert response.status == 200
        assert "text/css" in response.headers["Content-Type"]

    @pytest.mark.asyncio
    async def test__missing_file__returns_404(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/nope/")

        assert response.status == 404

    @pytest.mark.asyncio
    async def test__path_outside_site__returns_404(
        self, aiohttp_client: Any, app: web.Application
    ) -> None:
        client = await aiohttp_client(app)
        response = await client.get("/%2E%2E/secret.txt")

        assert response.status == 404
