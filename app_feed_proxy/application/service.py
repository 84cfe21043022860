"""
The core application service, containing pure business logic.

This module defines the orchestrator (AppService) behind both HTTP
endpoints: it composes the catalog cache, the upstream sources, the review
filter and the response mapper.
"""

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional

from .domain import *
from .exceptions import CacheError, CacheMissError, DecodeError
from .filtering import filter_recent
from .mapping import to_catalog_responses, to_review_responses

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AppService:
    """Serves the app catalog and per-app reviews."""

    def __init__(
        self,
        catalog_source: CatalogSource,
        review_source: ReviewSource,
        cache: CatalogCache,
        apps_cache_file: Optional[str] = None,
        reviews_dump_dir: Optional[str] = None,
        skip_invalid_ratings: bool = False,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initializes the service with its dependencies (ports)."""
        self.logger = logging.getLogger(self.__class__.__name__)
        self.catalog_source = catalog_source
        self.review_source = review_source
        self.cache = cache
        self.apps_cache_file = Path(apps_cache_file) if apps_cache_file else None
        self.reviews_dump_dir = Path(reviews_dump_dir) if reviews_dump_dir else None
        self.skip_invalid_ratings = skip_invalid_ratings
        self.clock = clock

    def _load_cached_catalog(self) -> List[CatalogEntry]:
        """Returns the cached catalog, or an empty list when unavailable."""
        if self.apps_cache_file is None:
            return []
        try:
            return self.cache.load(self.apps_cache_file)
        except CacheMissError as e:
            self.logger.debug(f"{e}, will fetch from API")
        except (CacheError, DecodeError) as e:
            self.logger.warning(
                f"Failed to load apps from cache, will fetch from API: {e}"
            )
        return []

    def _store_catalog(self, entries: List[CatalogEntry]):
        """Persists the catalog snapshot; failures are logged, not raised."""
        if self.apps_cache_file is None:
            return
        try:
            self.cache.save(self.apps_cache_file, entries)
        except CacheError as e:
            self.logger.error(f"Failed to save apps to cache file: {e}")

    def _review_dump_path(self, app_id: str) -> Path:
        return self.reviews_dump_dir / (
            _UNSAFE_FILENAME_CHARS.sub("_", app_id) + ".json"
        )

    def _dump_reviews(self, app_id: str, reviews: List[ReviewEntry]):
        """Writes the fetched reviews for inspection; failures are logged."""
        if self.reviews_dump_dir is None:
            return
        try:
            self.cache.dump_reviews(self._review_dump_path(app_id), reviews)
        except CacheError as e:
            self.logger.error(f"Failed to dump reviews of app {app_id}: {e}")

    async def get_apps(self) -> List[CatalogResponse]:
        """
        Returns the app catalog, from the cache file when one is present.

        Raises:
            UpstreamError: If the catalog must be fetched and the request fails.
            DecodeError: If the fetched catalog is malformed.
        """
        cached = self._load_cached_catalog()
        if cached:
            self.logger.info(f"Loaded {len(cached)} apps from cache file.")
            return to_catalog_responses(cached)

        entries = await self.catalog_source.get_catalog()
        self._store_catalog(entries)
        return to_catalog_responses(entries)

    async def get_reviews(
        self, app_id: str, hours: Optional[int] = None
    ) -> List[ReviewResponse]:
        """
        Returns the reviews of one app posted within the last `hours` hours.

        Reviews are always fetched fresh. A window of 0 or None keeps every
        review with a parseable timestamp.

        Args:
            app_id: The upstream identifier of the app.
            hours: Size of the recency window.

        Raises:
            UpstreamError: If the request fails.
            DecodeError: If the review feed is malformed.
            ConversionError: If a rating is not numeric and invalid ratings
                are not configured to be skipped.
        """
        self.logger.info(f"Starting get_reviews for app {app_id}, hours={hours}")

        reviews = await self.review_source.get_reviews(app_id)
        self._dump_reviews(app_id, reviews)

        recent = filter_recent(reviews, hours, now=self.clock())
        responses = to_review_responses(
            recent, skip_invalid=self.skip_invalid_ratings
        )

        self.logger.info(
            f"Returning {len(responses)} of {len(reviews)} reviews "
            f"for app {app_id}."
        )
        return responses
