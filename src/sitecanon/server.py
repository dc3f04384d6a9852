"""aiohttp server for sitecanon.

Application factory and route registration for the canonical lookup API.
"""

from aiohttp import web

from sitecanon.api.canonical import create_canonical_routes
from sitecanon.api.config import create_config_routes
from sitecanon.app_keys import base_url_key
from sitecanon.config import Config
from sitecanon.manager import FALLBACK_ORIGIN


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    app[base_url_key] = config.site.base_url or FALLBACK_ORIGIN

    app.router.add_routes(create_canonical_routes())
    app.router.add_routes(create_config_routes())

    return app


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    web.run_app(app, host=config.server.host, port=config.server.port)
