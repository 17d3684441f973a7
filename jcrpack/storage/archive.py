"""In-memory zip archive for package entries."""

from __future__ import annotations

import io
import zipfile
from typing import List, Union


class PackageArchive:
    """Collects named entries and compresses them into one zip blob."""

    def __init__(self) -> None:
        self._buffer = io.BytesIO()
        self._zip = zipfile.ZipFile(self._buffer, "w", zipfile.ZIP_DEFLATED)
        self._names: List[str] = []
        self._finalized = False

    @property
    def names(self) -> List[str]:
        """Entry names in the order they were written."""
        return list(self._names)

    def write_entry(self, path: str, content: Union[str, bytes, None]) -> None:
        if self._finalized:
            raise RuntimeError("PackageArchive is finalized.")
        self._zip.writestr(path, content if content is not None else b"")
        self._names.append(path)

    def finalize(self) -> bytes:
        """Close the archive and return the zip bytes."""
        if not self._finalized:
            self._zip.close()
            self._finalized = True
        return self._buffer.getvalue()
