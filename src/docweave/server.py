"""aiohttp server for previewing a built site.

Serves the files of the site directory; directory paths resolve to their
``index.html`` the same way a static web host would.
"""

import logging
from pathlib import Path

from aiohttp import web

logger = logging.getLogger(__name__)

site_dir_key = web.AppKey("site_dir", Path)


async def serve_site_file(request: web.Request) -> web.FileResponse:
    """Serve a file from the built site.

    Paths outside the site directory and missing files yield 404.
    """
    site_dir = request.app[site_dir_key]
    path = request.match_info["path"]

    target = (site_dir / path).resolve()
    if not target.is_relative_to(site_dir):
        raise web.HTTPNotFound()

    if target.is_dir():
        target = target / "index.html"
    if not target.is_file():
        raise web.HTTPNotFound()

    return web.FileResponse(target)


def create_app(site_dir: Path) -> web.Application:
    """Create aiohttp application.

    Args:
        site_dir: Directory containing the built site

    Returns:
        Configured aiohttp application
    """
    app = web.Application()
    app[site_dir_key] = site_dir.resolve()
    app.router.add_get("/{path:.*}", serve_site_file)
    return app


def run_server(site_dir: Path, host: str, port: int) -> None:
    """Run the preview server.

    Args:
        site_dir: Directory containing the built site
        host: Host to bind to
        port: Port to bind to
    """
    logger.info(f"Serving {site_dir} on http://{host}:{port}")
    app = create_app(site_dir)
    web.run_app(app, host=host, port=port, print=None)
