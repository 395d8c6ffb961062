"""Where custom style documents come from."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol

from format_engine.runtime.telemetry import Event, record_event


class ConfigSource(Protocol):
    """Supplies the raw bytes of a custom style document, if any."""

    def load(self) -> Optional[bytes]:
        ...


class BytesConfigSource:
    """In-memory document, e.g. one the host already read for us."""

    def __init__(self, data: Optional[bytes]) -> None:
        self._data = data

    def load(self) -> Optional[bytes]:
        return self._data


class FileConfigSource:
    """Reads a ``.clang-format`` style document from disk on every load."""

    def __init__(self, path: str | Path, *, logger_name: Optional[str] = None) -> None:
        self.path = Path(path).expanduser()
        self._logger_name = logger_name

    def load(self) -> Optional[bytes]:
        try:
            return self.path.read_bytes()
        except OSError as exc:
            record_event(
                Event.CONFIG_UNREADABLE,
                level="warning",
                logger_name=self._logger_name,
                path=self.path,
                error=exc,
            )
            return None


__all__ = ["BytesConfigSource", "ConfigSource", "FileConfigSource"]
