"""
Dependency Injection container for the app feed proxy.

This container uses the `dependency-injector` library to wire together all
the components of the application, such as the service and infrastructure
adapters, based on the application's configuration.
"""

from dependency_injector import containers, providers
import httpx

from ..application.domain import *
from ..application.service import AppService
from ..settings import load_settings

from .api_client import HttpCatalogSource, HttpReviewSource
from .file_cache import JsonFileCache


class Container(containers.DeclarativeContainer):
    """DI container for wiring the application components."""

    cli_args = providers.Configuration()

    config = providers.Singleton(load_settings)

    http_client = providers.Singleton(httpx.AsyncClient)

    catalog_source: providers.Factory[CatalogSource] = providers.Factory(
        HttpCatalogSource,
        client=http_client,
        apps_api_url=config.provided.upstream.apps_api_url,
        timeout=config.provided.upstream.timeout,
    )

    review_source: providers.Factory[ReviewSource] = providers.Factory(
        HttpReviewSource,
        client=http_client,
        reviews_base_url=config.provided.upstream.reviews_base_url,
        timeout=config.provided.upstream.timeout,
    )

    cache: providers.Singleton[CatalogCache] = providers.Singleton(JsonFileCache)

    app_service = providers.Factory(
        AppService,
        catalog_source=catalog_source,
        review_source=review_source,
        cache=cache,
        apps_cache_file=config.provided.cache.apps_file,
        reviews_dump_dir=config.provided.cache.reviews_dir,
        skip_invalid_ratings=config.provided.reviews.skip_invalid_ratings,
    )
