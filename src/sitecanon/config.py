"""Configuration management for sitecanon.

Supports TOML configuration format with auto-discovery.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from sitecanon.core.paths import is_origin

CONFIG_FILENAME = "sitecanon.toml"


@dataclass
class ServerConfig:
    """Lookup API server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class SiteConfig:
    """Site configuration."""

    base_url: str | None = None
    output_dir: Path = field(default_factory=lambda: Path("site"))


@dataclass
class Config:
    """Application configuration."""

    site: SiteConfig
    server: ServerConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for sitecanon.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> Config:
        return cls(site=SiteConfig(), server=ServerConfig())

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        return cls(
            site=cls._parse_site(data.get("site"), config_dir),
            server=cls._parse_server(data.get("server")),
            config_path=path,
        )

    @classmethod
    def _parse_site(cls, data: object, config_dir: Path) -> SiteConfig:
        """Parse site configuration section.

        Args:
            data: Raw site section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            SiteConfig instance
        """
        if data is None:
            return SiteConfig(output_dir=config_dir / "site")

        if not isinstance(data, dict):
            raise ValueError("site section must be a dictionary")

        base_url = data.get("base_url")
        if base_url is not None:
            if not isinstance(base_url, str):
                raise ValueError("site.base_url must be a string")
            if not is_origin(base_url):
                raise ValueError(
                    f"site.base_url must be an origin without path or trailing slash: {base_url}",
                )

        output_dir = data.get("output_dir", "site")
        if not isinstance(output_dir, str):
            raise ValueError("site.output_dir must be a string")

        return SiteConfig(base_url=base_url, output_dir=config_dir / output_dir)

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section."""
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    def with_overrides(
        self,
        *,
        base_url: str | None = None,
        output_dir: Path | None = None,
        host: str | None = None,
        port: int | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            base_url: Override site.base_url
            output_dir: Override site.output_dir
            host: Override server.host
            port: Override server.port

        Returns:
            New Config instance with overrides applied
        """
        site = self.site
        if base_url is not None or output_dir is not None:
            site = replace(
                self.site,
                base_url=base_url if base_url is not None else self.site.base_url,
                output_dir=output_dir if output_dir is not None else self.site.output_dir,
            )

        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        return replace(self, site=site, server=server)
