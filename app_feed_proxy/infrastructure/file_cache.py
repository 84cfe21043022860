"""JSON file implementation of the CatalogCache port."""

import logging
from pathlib import Path
from typing import List

from pydantic import TypeAdapter, ValidationError

from ..application.domain import CatalogCache, CatalogEntry, ReviewEntry
from ..application.exceptions import CacheMissError, CacheWriteError, DecodeError

_catalog_adapter = TypeAdapter(List[CatalogEntry])
_reviews_adapter = TypeAdapter(List[ReviewEntry])


class JsonFileCache(CatalogCache):
    """
    Stores catalog snapshots and review dumps as pretty-printed JSON arrays.

    Snapshots never expire and writes are not locked; concurrent writers to
    the same path race and the last one wins.
    """

    def __init__(self, indent: int = 2):
        """Initializes the file cache."""
        self.logger = logging.getLogger(self.__class__.__name__)
        self.indent = indent

    def _write(self, path: Path, data: bytes):
        """Writes bytes to `path`, creating parent directories."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise CacheWriteError(f"Failed to write {path}: {e}") from e

    def load(self, path: Path) -> List[CatalogEntry]:
        """
        Loads a catalog snapshot written by `save`.

        Raises:
            CacheMissError: If no snapshot exists at `path`.
            DecodeError: If the snapshot cannot be read or validated.
        """
        try:
            raw = path.read_bytes()
        except FileNotFoundError as e:
            raise CacheMissError(f"No cache file at {path}") from e
        except OSError as e:
            raise DecodeError(f"Failed to read cache file {path}: {e}") from e

        try:
            entries = _catalog_adapter.validate_json(raw)
        except ValidationError as e:
            raise DecodeError(f"Failed to decode cache file {path}: {e}") from e

        self.logger.debug(f"Loaded {len(entries)} apps from {path}")
        return entries

    def save(self, path: Path, entries: List[CatalogEntry]):
        """
        Persists a catalog snapshot.

        Raises:
            CacheWriteError: If the file cannot be written.
        """
        self._write(path, _catalog_adapter.dump_json(entries, indent=self.indent))
        self.logger.info(f"Saved {len(entries)} apps to {path}")

    def dump_reviews(self, path: Path, reviews: List[ReviewEntry]):
        """
        Writes a fetched review list.

        Raises:
            CacheWriteError: If the file cannot be written.
        """
        self._write(path, _reviews_adapter.dump_json(reviews, indent=self.indent))
        self.logger.debug(f"Dumped {len(reviews)} reviews to {path}")
