"""
This module defines the core domain models for the application.

These classes represent the pure, technology-agnostic entities and data
structures that the application's business logic operates on, together with
the ports the infrastructure layer implements.
"""

import dataclasses

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Tuple


# --- Domain Models ---

@dataclasses.dataclass(frozen=True)
class Link:
    """A link attached to a catalog entry."""

    rel: str = ""
    type: str = ""
    href: str = ""
    title: str = ""


@dataclasses.dataclass(frozen=True)
class CatalogEntry:
    """
    One application's record as decoded from the catalog feed.

    The upstream link field may be a single object or an array; it is
    resolved once at decode time into the flat `links` tuple.
    """

    app_id: str = ""
    bundle_id: str = ""
    name: str = ""
    author: str = ""
    release_date: str = ""
    category: str = ""
    artwork_urls: Tuple[str, ...] = ()
    links: Tuple[Link, ...] = ()
    price: str = ""
    rights: str = ""
    summary: str = ""
    title: str = ""


@dataclasses.dataclass(frozen=True)
class ReviewEntry:
    """A single review as decoded from the review feed."""

    review_id: str = ""
    author: str = ""
    content: str = ""
    rating: str = ""
    timestamp: str = ""


@dataclasses.dataclass(frozen=True)
class CatalogResponse:
    """Flat public projection of a CatalogEntry."""

    id: str
    app_id: str
    bundle_id: str
    author: str
    release_date: str
    name: str
    category: str
    artwork_url: str
    url: str
    summary: str
    price: str
    rights: str
    title: str


@dataclasses.dataclass(frozen=True)
class ReviewResponse:
    """Flat public projection of a ReviewEntry."""

    id: str
    content: str
    author: str
    score: int
    time: str


# --- Ports (Interfaces) ---

class CatalogSource(ABC):
    """A port for any source of the app catalog."""

    @abstractmethod
    async def get_catalog(self) -> List[CatalogEntry]:
        """Fetches the current app catalog."""
        pass


class ReviewSource(ABC):
    """A port for any source of app reviews."""

    @abstractmethod
    async def get_reviews(self, app_id: str) -> List[ReviewEntry]:
        """Fetches the most recent reviews of one app."""
        pass


class CatalogCache(ABC):
    """A port for persisting catalog snapshots and review dumps."""

    @abstractmethod
    def load(self, path: Path) -> List[CatalogEntry]:
        """
        Loads a cached catalog snapshot.
        Raises CacheMissError when nothing is cached at `path`, DecodeError
        when the snapshot is unreadable.
        """
        pass

    @abstractmethod
    def save(self, path: Path, entries: List[CatalogEntry]):
        """Persists a catalog snapshot. Raises CacheWriteError on failure."""
        pass

    @abstractmethod
    def dump_reviews(self, path: Path, reviews: List[ReviewEntry]):
        """Writes a fetched review list. Raises CacheWriteError on failure."""
        pass
