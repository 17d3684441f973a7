"""Persisting package entries to a directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, Union

logger = logging.getLogger(__name__)


class FileSink(Protocol):
    def save(self, path: str, content: Union[str, bytes, None]) -> Path: ...


class DirectorySink:
    """Writes entries below ``output_dir``, creating parent folders as needed.

    Paths that would land outside ``output_dir`` are rejected with
    :class:`ValueError`.
    """

    def __init__(self, output_dir: Union[str, Path]) -> None:
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def save(self, path: str, content: Union[str, bytes, None]) -> Path:
        file_path = self.output_dir / path.lstrip("/")
        if not file_path.resolve().is_relative_to(self.output_dir.resolve()):
            raise ValueError(f"Refusing to write {path!r} outside {self.output_dir}")
        file_path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            file_path.write_text(content, encoding="utf-8")
        else:
            file_path.write_bytes(content or b"")
        logger.debug("Wrote %s", file_path)
        return file_path
