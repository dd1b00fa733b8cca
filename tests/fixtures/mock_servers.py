"""Mock HTTP servers for testing list fetching and the router API."""

import hashlib

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from dns_routing.router import MockRouter

ROUTER_REALM = "Keenetic Test"
ROUTER_CHALLENGE = "0123456789ABCDEF"


@pytest.fixture
async def mock_list_server(sample_video_list):
    """Mock HTTP server serving domain lists.

    ``server.lists`` maps a path to the body served for it and
    ``server.hits`` counts requests per path.
    """

    lists = {"/video.txt": sample_video_list}
    hits = {}

    async def handle_list(request):
        hits[request.path] = hits.get(request.path, 0) + 1
        if request.path not in lists:
            raise web.HTTPNotFound()
        return web.Response(text=lists[request.path], content_type="text/plain")

    app = web.Application()
    app.router.add_get("/{name}", handle_list)

    server = TestServer(app)
    await server.start_server()
    server.lists = lists
    server.hits = hits

    yield server

    await server.close()


@pytest.fixture
async def mock_keenetic_server():
    """Fake Keenetic RCI endpoint backed by an in-memory router.

    ``server.router`` is the MockRouter holding the device state.
    """

    router = MockRouter(version="5.0.1")

    def authorized(request):
        return request.cookies.get("session") == "ok"

    async def get_auth(request):
        if authorized(request):
            return web.Response()
        return web.Response(
            status=401,
            headers={"X-NDM-Realm": ROUTER_REALM, "X-NDM-Challenge": ROUTER_CHALLENGE},
        )

    async def post_auth(request):
        body = await request.json()
        md5_hex = hashlib.md5(f"admin:{ROUTER_REALM}:secret".encode()).hexdigest()
        expected = hashlib.sha256(f"{ROUTER_CHALLENGE}{md5_hex}".encode()).hexdigest()
        if body.get("login") != "admin" or body.get("password") != expected:
            return web.Response(status=401)
        response = web.Response()
        response.set_cookie("session", "ok")
        return response

    async def show_version(request):
        if not authorized(request):
            return web.Response(status=401)
        return web.json_response({"title": router.version, "model": "Test"})

    async def show_interface(request):
        if not authorized(request):
            return web.Response(status=401)
        return web.json_response(router.interfaces)

    async def object_groups(request):
        if not authorized(request):
            return web.Response(status=401)
        return web.json_response(
            {
                name: {"include": [{"address": d} for d in domains]}
                for name, domains in router.groups.items()
            }
        )

    async def routes(request):
        if not authorized(request):
            return web.Response(status=401)
        return web.json_response(
            [
                {"group": name, "interface": iface, "auto": True}
                for name, iface in router.routes.items()
            ]
        )

    async def parse_batch(request):
        if not authorized(request):
            return web.Response(status=401)
        batch = await request.json()
        commands = [item["parse"] for item in batch]
        router.batches.append(commands)
        replies = []
        for command in commands:
            result = router.run_command(command)
            status = "message" if result.ok else "error"
            replies.append({"parse": {"status": [{"status": status, "message": result.message}]}})
        return web.json_response(replies)

    app = web.Application()
    app.router.add_get("/auth", get_auth)
    app.router.add_post("/auth", post_auth)
    app.router.add_get("/rci/show/version", show_version)
    app.router.add_get("/rci/show/interface", show_interface)
    app.router.add_get("/rci/object-group/fqdn", object_groups)
    app.router.add_get("/rci/dns-proxy/route", routes)
    app.router.add_post("/rci/", parse_batch)

    server = TestServer(app)
    await server.start_server()
    server.router = router

    yield server

    await server.close()
