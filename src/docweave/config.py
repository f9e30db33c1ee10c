"""Configuration management for docweave.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

CONFIG_FILENAME = "docweave.toml"


@dataclass
class SiteConfig:
    """Site metadata exposed to templates."""

    name: str = "Documentation"
    description: str = ""


@dataclass
class DocsConfig:
    """Documentation source and output configuration."""

    source_dir: Path = field(default_factory=lambda: Path("docs"))
    site_dir: Path = field(default_factory=lambda: Path("site"))
    nav_file: Path = field(default_factory=lambda: Path("nav.yaml"))


@dataclass
class ThemeConfig:
    """Theme selection."""

    name: str = "default"
    skin: str = "default"


@dataclass
class BuildConfig:
    """Build behavior."""

    transliterate_links: bool = True
    strict: bool = True


@dataclass
class SearchSettings:
    """Search index configuration."""

    enabled: bool = True
    lang: list[str] = field(default_factory=lambda: ["en"])
    prebuild_index: bool = False
    separator: str = r"[\s\-]+"


@dataclass
class ServerConfig:
    """Preview server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class Config:
    """Application configuration."""

    site: SiteConfig
    docs: DocsConfig
    theme: ThemeConfig
    build: BuildConfig
    search: SearchSettings
    server: ServerConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for docweave.toml in current directory and parents.

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
    def _default(cls) -> "Config":
        return cls(
            site=SiteConfig(),
            docs=DocsConfig(),
            theme=ThemeConfig(),
            build=BuildConfig(),
            search=SearchSettings(),
            server=ServerConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
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
            site=cls._parse_site(data.get("site")),
            docs=cls._parse_docs(data.get("docs"), config_dir),
            theme=cls._parse_theme(data.get("theme"), config_dir),
            build=cls._parse_build(data.get("build")),
            search=cls._parse_search(data.get("search")),
            server=cls._parse_server(data.get("server")),
            config_path=path,
        )

    @classmethod
    def _parse_site(cls, data: object) -> SiteConfig:
        if data is None:
            return SiteConfig()

        if not isinstance(data, dict):
            raise ValueError("site section must be a dictionary")

        name = data.get("name", "Documentation")
        if not isinstance(name, str):
            raise ValueError("site.name must be a string")

        description = data.get("description", "")
        if not isinstance(description, str):
            raise ValueError("site.description must be a string")

        return SiteConfig(name=name, description=description)

    @classmethod
    def _parse_docs(cls, data: object, config_dir: Path) -> DocsConfig:
        """Parse docs configuration section.

        Args:
            data: Raw docs section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            DocsConfig instance
        """
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ValueError("docs section must be a dictionary")

        paths: dict[str, Path] = {}
        for key, default in (
            ("source_dir", "docs"),
            ("site_dir", "site"),
            ("nav_file", "nav.yaml"),
        ):
            value = data.get(key, default)
            if not isinstance(value, str):
                raise ValueError(f"docs.{key} must be a string")
            paths[key] = config_dir / value

        return DocsConfig(**paths)

    @classmethod
    def _parse_theme(cls, data: object, config_dir: Path) -> ThemeConfig:
        """Parse theme configuration section.

        A theme name that points to an existing directory next to the
        config file is made absolute; other names refer to bundled themes.
        """
        if data is None:
            return ThemeConfig()

        if not isinstance(data, dict):
            raise ValueError("theme section must be a dictionary")

        name = data.get("name", "default")
        if not isinstance(name, str):
            raise ValueError("theme.name must be a string")
        if (config_dir / name).is_dir():
            name = str(config_dir / name)

        skin = data.get("skin", "default")
        if not isinstance(skin, str):
            raise ValueError("theme.skin must be a string")

        return ThemeConfig(name=name, skin=skin)

    @classmethod
    def _parse_build(cls, data: object) -> BuildConfig:
        if data is None:
            return BuildConfig()

        if not isinstance(data, dict):
            raise ValueError("build section must be a dictionary")

        transliterate_links = data.get("transliterate_links", True)
        if not isinstance(transliterate_links, bool):
            raise ValueError("build.transliterate_links must be a boolean")

        strict = data.get("strict", True)
        if not isinstance(strict, bool):
            raise ValueError("build.strict must be a boolean")

        return BuildConfig(transliterate_links=transliterate_links, strict=strict)

    @classmethod
    def _parse_search(cls, data: object) -> SearchSettings:
        """Parse search configuration section.

        Args:
            data: Raw search section data

        Returns:
            SearchSettings instance
        """
        if data is None:
            return SearchSettings()

        if not isinstance(data, dict):
            raise ValueError("search section must be a dictionary")

        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError("search.enabled must be a boolean")

        lang_raw = data.get("lang", ["en"])
        if isinstance(lang_raw, str):
            lang_raw = [lang_raw]
        if not isinstance(lang_raw, list):
            raise ValueError("search.lang must be a list")
        lang: list[str] = []
        for item in lang_raw:
            if not isinstance(item, str):
                raise ValueError("search.lang items must be strings")
            lang.append(item)

        prebuild_index = data.get("prebuild_index", False)
        if not isinstance(prebuild_index, bool):
            raise ValueError("search.prebuild_index must be a boolean")

        separator = data.get("separator", r"[\s\-]+")
        if not isinstance(separator, str):
            raise ValueError("search.separator must be a string")

        return SearchSettings(
            enabled=enabled,
            lang=lang,
            prebuild_index=prebuild_index,
            separator=separator,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8000)
        if not isinstance(port, int):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    def with_overrides(
        self,
        *,
        source_dir: Path | None = None,
        site_dir: Path | None = None,
        skin: str | None = None,
        strict: bool | None = None,
        host: str | None = None,
        port: int | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            source_dir: Override docs.source_dir
            site_dir: Override docs.site_dir
            skin: Override theme.skin
            strict: Override build.strict
            host: Override server.host
            port: Override server.port

        Returns:
            New Config instance with overrides applied
        """
        docs = self.docs
        if source_dir is not None or site_dir is not None:
            docs = replace(
                self.docs,
                source_dir=source_dir if source_dir is not None else self.docs.source_dir,
                site_dir=site_dir if site_dir is not None else self.docs.site_dir,
            )

        theme = self.theme
        if skin is not None:
            theme = replace(self.theme, skin=skin)

        build = self.build
        if strict is not None:
            build = replace(self.build, strict=strict)

        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        return replace(self, docs=docs, theme=theme, build=build, server=server)
