"""Application keys for type-safe app configuration access."""

from aiohttp import web

base_url_key = web.AppKey("base_url", str)
