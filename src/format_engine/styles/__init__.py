"""Style configurations and the provider that resolves them by name."""

from .models import SortIncludes, StyleConfig
from .parser import StyleParseError, parse_configuration
from .predefined import (
    DEFAULT_STYLE,
    PREDEFINED_STYLES,
    get_predefined_style,
    predefined_style_names,
)
from .provider import (
    CUSTOM_STYLE,
    DefaultStyleProvider,
    StyleProvider,
    StyleUnavailableError,
)
from .sources import BytesConfigSource, ConfigSource, FileConfigSource

__all__ = [
    "BytesConfigSource",
    "ConfigSource",
    "CUSTOM_STYLE",
    "DEFAULT_STYLE",
    "DefaultStyleProvider",
    "FileConfigSource",
    "PREDEFINED_STYLES",
    "SortIncludes",
    "StyleConfig",
    "StyleParseError",
    "StyleProvider",
    "StyleUnavailableError",
    "get_predefined_style",
    "parse_configuration",
    "predefined_style_names",
]
