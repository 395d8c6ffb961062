"""Explicit configuration handed to a ``FormatSession`` by its host."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from format_engine.runtime.telemetry import ENV_PREFIX
from format_engine.styles import DEFAULT_STYLE


@dataclass(frozen=True, slots=True)
class FormatConfig:
    """Per-host defaults: which style to apply and which file is being edited.

    ``filename_hint`` only helps the include pass find the main header.
    """

    style: str = DEFAULT_STYLE
    filename_hint: str = "tmp"

    def __post_init__(self) -> None:
        if not self.style:
            raise ValueError("style cannot be empty")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FormatConfig":
        env = os.environ if environ is None else environ
        return cls(
            style=env.get(f"{ENV_PREFIX}STYLE") or DEFAULT_STYLE,
            filename_hint=env.get(f"{ENV_PREFIX}FILENAME_HINT") or "tmp",
        )

    def with_style(self, style: str) -> "FormatConfig":
        return replace(self, style=style)

    def with_filename(self, filename_hint: str) -> "FormatConfig":
        return replace(self, filename_hint=filename_hint)


__all__ = ["FormatConfig"]
