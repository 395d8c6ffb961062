"""Resolve a requested style name into a ``StyleConfig``."""

from __future__ import annotations

from typing import Optional, Protocol

from format_engine.runtime.telemetry import phase

from .models import StyleConfig
from .parser import StyleParseError, parse_configuration
from .predefined import (
    DEFAULT_STYLE,
    PREDEFINED_STYLES,
    get_predefined_style,
    predefined_style_names,
)
from .sources import ConfigSource

CUSTOM_STYLE = "custom"


class StyleUnavailableError(RuntimeError):
    """Raised when a requested style cannot be turned into a configuration."""

    def __init__(self, style: str, *, reason: str = "") -> None:
        super().__init__(f"Could not set style: {style}")
        self.style = style
        self.reason = reason


class StyleProvider(Protocol):
    def resolve(self, name: str) -> StyleConfig:
        """Return the configuration for ``name`` or raise ``StyleUnavailableError``."""
        ...


class DefaultStyleProvider:
    """Predefined styles plus a ``custom`` style read from a config source."""

    def __init__(
        self,
        custom_source: Optional[ConfigSource] = None,
        *,
        logger_name: Optional[str] = None,
    ) -> None:
        self.custom_source = custom_source
        self._logger_name = logger_name

    def resolve(self, name: str) -> StyleConfig:
        with phase(
            "styles", "resolve", logger_name=self._logger_name, style=name
        ) as handle:
            if name == CUSTOM_STYLE:
                return self._resolve_custom(name)
            style = get_predefined_style(name)
            if style is None:
                handle.annotate("known", predefined_style_names())
                raise StyleUnavailableError(name, reason="unknown predefined style")
            return style

    def _resolve_custom(self, name: str) -> StyleConfig:
        data = self.custom_source.load() if self.custom_source is not None else None
        if data is None:
            raise StyleUnavailableError(name, reason="no readable configuration")
        try:
            return parse_configuration(
                data, base=PREDEFINED_STYLES[DEFAULT_STYLE], name=name
            )
        except StyleParseError as exc:
            raise StyleUnavailableError(name, reason=str(exc)) from exc


__all__ = [
    "CUSTOM_STYLE",
    "DefaultStyleProvider",
    "StyleProvider",
    "StyleUnavailableError",
]
