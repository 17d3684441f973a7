"""jcrpack — turn fetched pages and their assets into a FileVault content package."""

__version__ = "0.1.0"
