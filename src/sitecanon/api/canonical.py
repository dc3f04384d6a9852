"""Canonical lookup API endpoints.

Reports the canonical URL and the redirect target for a path, and the
canonical URL for a page type. No HTTP redirects are issued; clients
normalize their own address bar.
"""

from aiohttp import web

from sitecanon.app_keys import base_url_key
from sitecanon.core.page_types import page_type_from_kind
from sitecanon.core.redirects import resolve_redirect
from sitecanon.manager import CanonicalURLManager


def create_canonical_routes() -> list[web.RouteDef]:
    return [
        web.get("/api/canonical", get_canonical),
        web.get("/api/canonical/{path:.*}", get_canonical),
        web.get("/api/page-types/{kind}", get_page_type_canonical),
    ]


async def get_canonical(request: web.Request) -> web.Response:
    path = request.match_info.get("path", "")
    normalized = path if path.startswith("/") else f"/{path}"
    manager = CanonicalURLManager(base_url=request.app[base_url_key])

    return web.json_response(
        {
            "path": normalized,
            "canonical": manager.generate_canonical(normalized),
            "redirect": resolve_redirect(normalized),
        },
    )


async def get_page_type_canonical(request: web.Request) -> web.Response:
    kind = request.match_info["kind"]
    page = page_type_from_kind(kind, request.query.get("slug", ""))
    if page is None:
        return web.json_response(
            {"error": "Unknown page type", "kind": kind},
            status=404,
        )

    manager = CanonicalURLManager(base_url=request.app[base_url_key])
    return web.json_response(
        {"kind": kind, "canonical": manager.get_canonical_for_page_type(page)},
    )
