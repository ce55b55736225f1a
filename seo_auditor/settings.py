"""Configuration loading for the SEO page auditor.

Settings are read from a YAML file (``seo_auditor/config/settings.yaml`` by
default).  ``SEO_AUDITOR_CONFIG`` may point at an alternative file; a ``.env``
file in the working directory is loaded first so the variable can live there.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from seo_auditor.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "config" / "settings.yaml"
CONFIG_ENV_VAR = "SEO_AUDITOR_CONFIG"


@dataclass(frozen=True)
class Viewport:
    width: int
    height: int


@dataclass(frozen=True)
class RendererSettings:
    """Options for the Playwright page renderer."""
    timeout_ms: int = 30_000
    wait_until: str = "networkidle"
    capture_screenshots: bool = True
    desktop_viewport: Viewport = field(default_factory=lambda: Viewport(1920, 1080))
    mobile_viewport: Viewport = field(default_factory=lambda: Viewport(360, 640))
    user_agent: str = ""


@dataclass(frozen=True)
class ProbeSettings:
    timeout_seconds: float = 10.0
    user_agent: str = "SEOPageAuditor/1.0"


@dataclass(frozen=True)
class FetcherSettings:
    """Options for static (non-rendered) page fetches."""
    timeout_seconds: float = 15.0
    max_redirects: int = 5
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )


@dataclass(frozen=True)
class Settings:
    """Immutable, fully-resolved configuration."""
    app_name: str
    version: str
    renderer: RendererSettings
    probe: ProbeSettings
    fetcher: FetcherSettings
    max_schema_depth: int
    analytics_signatures: tuple[str, ...]
    social_platforms: tuple[tuple[str, tuple[str, ...]], ...]
    payment_keywords: tuple[str, ...]
    source: str = ""


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    value = config.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"Section '{name}' must be a mapping")
    return value


def _convert(section: str, raw: dict[str, Any], key: str, default: Any, kind: type) -> Any:
    """Read ``raw[key]`` as *kind*, falling back to *default* when absent."""
    value = raw.get(key, default)
    if value is None:
        return default
    if kind in (int, float) and isinstance(value, bool):
        raise ConfigurationError(f"{section}.{key} must be a number (got {value!r})")
    try:
        return kind(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"{section}.{key} must be {kind.__name__} (got {value!r})"
        ) from exc


def _string_list(section: str, raw: dict[str, Any], key: str) -> tuple[str, ...]:
    values = raw.get(key) or []
    if not isinstance(values, list):
        raise ConfigurationError(f"{section}.{key} must be a list")
    return tuple(str(v) for v in values)


def _viewport(section: str, raw: Any, default: Viewport) -> Viewport:
    if not raw:
        return default
    if not isinstance(raw, dict):
        raise ConfigurationError(f"{section} must be a mapping with width and height")
    return Viewport(
        width=_convert(section, raw, "width", default.width, int),
        height=_convert(section, raw, "height", default.height, int),
    )


def _build_settings(config: dict[str, Any], source: str) -> Settings:
    """Convert a raw YAML mapping into a :class:`Settings` instance.

    Raises:
        ConfigurationError: If a section or value has the wrong shape or type.
    """
    app_cfg = _section(config, "app")
    rend_cfg = _section(config, "renderer")
    probe_cfg = _section(config, "probe")
    fetch_cfg = _section(config, "fetcher")
    sd_cfg = _section(config, "structured_data")
    analytics_cfg = _section(config, "analytics")
    social_cfg = _section(config, "social")
    title_cfg = _section(config, "title")

    defaults = RendererSettings()
    renderer = RendererSettings(
        timeout_ms=_convert("renderer", rend_cfg, "timeout_ms", defaults.timeout_ms, int),
        wait_until=_convert("renderer", rend_cfg, "wait_until", defaults.wait_until, str),
        capture_screenshots=bool(rend_cfg.get("capture_screenshots", defaults.capture_screenshots)),
        desktop_viewport=_viewport(
            "renderer.desktop_viewport", rend_cfg.get("desktop_viewport"), defaults.desktop_viewport,
        ),
        mobile_viewport=_viewport(
            "renderer.mobile_viewport", rend_cfg.get("mobile_viewport"), defaults.mobile_viewport,
        ),
        user_agent=_convert("renderer", rend_cfg, "user_agent", defaults.user_agent, str),
    )
    probe = ProbeSettings(
        timeout_seconds=_convert("probe", probe_cfg, "timeout_seconds", ProbeSettings.timeout_seconds, float),
        user_agent=_convert("probe", probe_cfg, "user_agent", ProbeSettings.user_agent, str),
    )
    fetcher = FetcherSettings(
        timeout_seconds=_convert("fetcher", fetch_cfg, "timeout_seconds", FetcherSettings.timeout_seconds, float),
        max_redirects=_convert("fetcher", fetch_cfg, "max_redirects", FetcherSettings.max_redirects, int),
        user_agent=_convert("fetcher", fetch_cfg, "user_agent", FetcherSettings.user_agent, str),
    )

    platforms_raw = social_cfg.get("platforms", {}) or {}
    if not isinstance(platforms_raw, dict):
        raise ConfigurationError(f"social.platforms must be a mapping in {source}")
    social_platforms = tuple(
        (str(name), _string_list("social.platforms", platforms_raw, name))
        for name in platforms_raw
    )

    max_depth = _convert("structured_data", sd_cfg, "max_depth", 20, int)
    if max_depth < 1:
        raise ConfigurationError(f"structured_data.max_depth must be >= 1 (got {max_depth})")

    return Settings(
        app_name=_convert("app", app_cfg, "name", "SEO Page Auditor", str),
        version=_convert("app", app_cfg, "version", "", str),
        renderer=renderer,
        probe=probe,
        fetcher=fetcher,
        max_schema_depth=max_depth,
        analytics_signatures=_string_list("analytics", analytics_cfg, "signatures"),
        social_platforms=social_platforms,
        payment_keywords=_string_list("title", title_cfg, "payment_keywords"),
        source=source,
    )


def load_settings(path: Optional[str] = None, env_path: str = ".env") -> Settings:
    """Load settings from *path*, ``$SEO_AUDITOR_CONFIG`` or the packaged defaults.

    Args:
        path: Explicit YAML file.  Takes precedence over the environment.
        env_path: ``.env`` file loaded before the environment is consulted.

    Returns:
        A frozen :class:`Settings` instance.

    Raises:
        ConfigurationError: If the chosen file is missing or not valid YAML.
    """
    env_file = Path(env_path)
    if env_file.exists():
        load_dotenv(env_file)
        logger.debug("Loaded environment from %s", env_path)

    chosen = path or os.getenv(CONFIG_ENV_VAR) or str(DEFAULT_CONFIG_PATH)
    config_file = Path(chosen)
    if not config_file.exists():
        raise ConfigurationError(f"Config file not found: {chosen}")

    try:
        with open(config_file, "r", encoding="utf-8") as fh:
            config = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {chosen}: {exc}") from exc

    if not isinstance(config, dict):
        raise ConfigurationError(f"Top level of {chosen} must be a mapping")

    logger.debug("Configuration loaded from %s", chosen)
    return _build_settings(config, source=str(config_file))


_defaults: Optional[Settings] = None


def default_settings() -> Settings:
    """Return the packaged default settings (loaded once)."""
    global _defaults
    if _defaults is None:
        with open(DEFAULT_CONFIG_PATH, "r", encoding="utf-8") as fh:
            config = yaml.safe_load(fh) or {}
        _defaults = _build_settings(config, source=str(DEFAULT_CONFIG_PATH))
    return _defaults
