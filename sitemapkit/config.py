"""
Configuration management for the sitemap codec.
Centralizes defaults for URL construction, parsing strictness and output formatting.
"""
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .interfaces import ConfigurationProvider
from .models import ChangeFreq

# Auto-load .env file if available
try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

KNOWN_KEYS = frozenset({
    "DEFAULT_CHANGEFREQ",
    "DEFAULT_PRIORITY",
    "STRICT_CHANGEFREQ",
    "DECLARE_EXTENSION_NAMESPACES",
    "INDENT",
})


@dataclass
class SitemapConfiguration:
    """Configuration for building, rendering and parsing sitemaps"""
    default_change_freq: ChangeFreq = ChangeFreq.MONTHLY
    default_priority: Optional[float] = 0.5
    strict_change_freq: bool = True
    declare_extension_namespaces: bool = True
    indent: str = "  "

    @classmethod
    def from_provider(cls, provider: ConfigurationProvider) -> "SitemapConfiguration":
        """Create configuration from a provider, falling back to defaults on bad values"""
        defaults = cls()
        return cls(
            default_change_freq=_to_change_freq(
                provider.get("DEFAULT_CHANGEFREQ"), defaults.default_change_freq
            ),
            default_priority=_to_float(provider.get("DEFAULT_PRIORITY"), defaults.default_priority),
            strict_change_freq=_to_bool(provider.get("STRICT_CHANGEFREQ"), defaults.strict_change_freq),
            declare_extension_namespaces=_to_bool(
                provider.get("DECLARE_EXTENSION_NAMESPACES"), defaults.declare_extension_namespaces
            ),
            indent=_to_indent(provider.get("INDENT"), defaults.indent),
        )

    @classmethod
    def from_env(cls) -> "SitemapConfiguration":
        """Create configuration from SITEMAP_* environment variables"""
        return cls.from_provider(EnvironmentConfigProvider())

    def validate(self) -> bool:
        """Check that all values are usable"""
        if not isinstance(self.default_change_freq, ChangeFreq):
            return False
        if self.default_priority is not None and not 0.0 <= self.default_priority <= 1.0:
            return False
        return self.indent.strip() == ""


class EnvironmentConfigProvider:
    """Reads SITEMAP_* environment variables; keys are case-insensitive"""

    def __init__(self, prefix: str = "SITEMAP_", environ: Optional[Mapping[str, str]] = None):
        self.prefix = prefix
        self.environ = os.environ if environ is None else environ

    def get(self, key: str, default: Any = None) -> Any:
        value = self.environ.get(f"{self.prefix}{key.upper()}")
        # an exported but empty variable counts as unset
        return default if value in (None, "") else value

    def validate(self) -> bool:
        return True


class DictConfigProvider:
    """Reads settings from a mapping such as a parsed settings file section"""

    def __init__(self, config_dict: Mapping[str, Any]):
        self.config = {str(key).upper(): value for key, value in config_dict.items()}

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key.upper(), default)

    def validate(self) -> bool:
        """True when every key is a known setting"""
        return set(self.config) <= KNOWN_KEYS


class ConfigurationManager:
    """Centralized configuration manager"""

    def __init__(self, provider: Optional[ConfigurationProvider] = None):
        self.provider = provider or EnvironmentConfigProvider()

    def get_sitemap_config(self) -> SitemapConfiguration:
        """Get sitemap configuration"""
        return SitemapConfiguration.from_provider(self.provider)

    def validate_all(self) -> bool:
        """Validate all configurations"""
        return self.provider.validate() and self.get_sitemap_config().validate()


def _to_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    return default


def _to_float(value: Any, default: Optional[float]) -> Optional[float]:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _to_indent(value: Any, default: str) -> str:
    if not isinstance(value, str) or value.strip():
        return default
    return value


def _to_change_freq(value: Any, default: ChangeFreq) -> ChangeFreq:
    if value is None:
        return default
    try:
        return ChangeFreq.coerce(value)
    except ValueError:
        return default
