"""Storage collaborators — zip archive & directory output."""

from jcrpack.storage.archive import PackageArchive
from jcrpack.storage.filesystem import DirectorySink, FileSink

__all__ = ["PackageArchive", "DirectorySink", "FileSink"]
