"""
HTTP job-control surface.

Routes (all ``GET`` with a ``url`` query parameter):

* ``/api/sitemap/begin``    – start a crawl unless one was already started
* ``/api/sitemap/progress`` – integer 0..100, ``0`` for unknown keys
* ``/api/sitemap/result``   – sitemap tree, or ``null`` while not ready

A progress of 100 with a ``null`` result means the crawl is still
finishing; pollers should simply ask again.
"""
from __future__ import annotations

from aiohttp import web

from sitemap_service.engine import Engine
from sitemap_service.logger import logger

__all__ = ["ENGINE_KEY", "create_app", "run_server"]

ENGINE_KEY = web.AppKey("engine", Engine)


def _url_param(request: web.Request) -> str:
    url = request.query.get("url", "").strip()
    if not url:
        raise web.HTTPBadRequest(text="missing 'url' query parameter")
    return url


async def begin(request: web.Request) -> web.Response:
    url = _url_param(request)
    admitted = request.app[ENGINE_KEY].begin(url)
    return web.json_response({"url": url, "admitted": admitted}, status=202)


async def progress(request: web.Request) -> web.Response:
    url = _url_param(request)
    return web.json_response(request.app[ENGINE_KEY].get_progress(url))


async def result(request: web.Request) -> web.Response:
    url = _url_param(request)
    node = request.app[ENGINE_KEY].get_result(url)
    return web.json_response(node.to_dict() if node is not None else None)


async def _drain_crawls(app: web.Application) -> None:
    await app[ENGINE_KEY].wait()


def create_app(engine: Engine) -> web.Application:
    app = web.Application()
    app[ENGINE_KEY] = engine
    app.router.add_get("/api/sitemap/begin", begin)
    app.router.add_get("/api/sitemap/progress", progress)
    app.router.add_get("/api/sitemap/result", result)
    app.on_cleanup.append(_drain_crawls)
    return app


def run_server(engine: Engine, host: str, port: int) -> None:
    """Serve :func:`create_app` until interrupted."""
    logger.info("Serving sitemap API on http://%s:%d", host, port)
    web.run_app(create_app(engine), host=host, port=port, print=None)
