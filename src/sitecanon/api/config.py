"""Config API endpoint."""

from aiohttp import web

from sitecanon.app_keys import base_url_key


def create_config_routes() -> list[web.RouteDef]:
    return [web.get("/api/config", get_config)]


async def get_config(request: web.Request) -> web.Response:
    return web.json_response({"baseUrl": request.app[base_url_key]})
