"""HTTP implementations of the CatalogSource and ReviewSource ports."""

from typing import List
from urllib.parse import quote

import httpx

from ..application.domain import (
    CatalogEntry,
    CatalogSource,
    ReviewEntry,
    ReviewSource,
)

from .base_client import BaseClient
from .feed_models import decode_catalog, decode_reviews

_REVIEWS_PATH = "/id={app_id}/sortBy=mostRecent/page=1/json"


class HttpCatalogSource(BaseClient, CatalogSource):
    """A catalog source that fetches the app feed via the upstream HTTP API."""

    def __init__(
        self, client: httpx.AsyncClient, apps_api_url: str, timeout: float
    ):
        """Initializes the catalog source adapter."""
        super().__init__(client, apps_api_url, timeout)
        self.endpoint = apps_api_url

    async def get_catalog(self) -> List[CatalogEntry]:
        """
        Fetches and decodes the app catalog.

        Returns:
            Catalog entries in upstream order.

        Raises:
            UpstreamError: If the request fails or returns a non-200 status.
            DecodeError: If the payload does not match the catalog feed.
        """
        self.logger.info(f"Fetching apps from API {self.endpoint}...")

        payload = await self._execute_fetch(self.endpoint)
        entries = decode_catalog(payload)

        self.logger.info(f"Successfully fetched {len(entries)} apps from API.")
        return entries


class HttpReviewSource(BaseClient, ReviewSource):
    """A review source that fetches per-app review feeds via HTTP."""

    def __init__(
        self, client: httpx.AsyncClient, reviews_base_url: str, timeout: float
    ):
        """Initializes the review source adapter."""
        super().__init__(client, reviews_base_url, timeout)
        self.base_url = reviews_base_url.rstrip("/")

    def _reviews_url(self, app_id: str) -> str:
        return self.base_url + _REVIEWS_PATH.format(app_id=quote(app_id, safe=""))

    async def get_reviews(self, app_id: str) -> List[ReviewEntry]:
        """
        Fetches and decodes the most recent reviews of one app.

        Args:
            app_id: The upstream identifier of the app.

        Returns:
            Review entries in upstream order.

        Raises:
            UpstreamError: If the request fails or returns a non-200 status.
            DecodeError: If the payload does not match the review feed.
        """
        self.logger.info(f"Fetching reviews for app {app_id} from API...")

        payload = await self._execute_fetch(self._reviews_url(app_id))
        reviews = decode_reviews(payload)

        self.logger.info(
            f"Successfully fetched {len(reviews)} reviews for app {app_id}."
        )
        return reviews
