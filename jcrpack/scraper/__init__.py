"""Scraper package — page input models & asset retrieval."""

from jcrpack.scraper.fetcher import HttpRetriever, Retriever, fetch_resource
from jcrpack.scraper.models import FetchedResource, RawPage

__all__ = ["HttpRetriever", "Retriever", "fetch_resource", "FetchedResource", "RawPage"]
