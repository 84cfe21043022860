"""
Mapping of decoded domain records to the flat public response shapes.
"""

import logging
from typing import Iterable, List

from .domain import (
    CatalogEntry,
    CatalogResponse,
    Link,
    ReviewEntry,
    ReviewResponse,
)
from .exceptions import ConversionError

logger = logging.getLogger(__name__)

_CANONICAL_REL = "alternate"
_CANONICAL_TYPE = "text/html"


def canonical_url(links: Iterable[Link]) -> str:
    """Return the href of the first alternate text/html link, or ''."""
    for link in links:
        if link.rel == _CANONICAL_REL and link.type == _CANONICAL_TYPE:
            return link.href
    return ""


def to_catalog_response(entry: CatalogEntry) -> CatalogResponse:
    """Maps a single catalog entry to its public response shape."""
    artwork_url = entry.artwork_urls[0] if entry.artwork_urls else ""

    return CatalogResponse(
        id=entry.app_id,
        app_id=entry.app_id,
        bundle_id=entry.bundle_id,
        author=entry.author,
        release_date=entry.release_date,
        name=entry.name,
        category=entry.category,
        artwork_url=artwork_url,
        url=canonical_url(entry.links),
        summary=entry.summary,
        price=entry.price,
        rights=entry.rights,
        title=entry.title,
    )


def to_review_response(entry: ReviewEntry) -> ReviewResponse:
    """
    Maps a single review to its public response shape.

    Raises:
        ConversionError: If the rating label is not a base-10 integer.
    """
    try:
        score = int(entry.rating, 10)
    except ValueError as e:
        raise ConversionError(
            f"Failed to convert rating {entry.rating!r} of review "
            f"{entry.review_id!r} to integer"
        ) from e

    return ReviewResponse(
        id=entry.review_id,
        content=entry.content,
        author=entry.author,
        score=score,
        time=entry.timestamp,
    )


def to_catalog_responses(entries: Iterable[CatalogEntry]) -> List[CatalogResponse]:
    """Maps a batch of catalog entries, preserving order."""
    return [to_catalog_response(entry) for entry in entries]


def to_review_responses(
    entries: Iterable[ReviewEntry], skip_invalid: bool = False
) -> List[ReviewResponse]:
    """
    Maps a batch of reviews, preserving order.

    By default one unconvertible review fails the whole batch. With
    `skip_invalid` the offending reviews are logged and left out instead.
    """
    responses = []
    for entry in entries:
        try:
            responses.append(to_review_response(entry))
        except ConversionError as e:
            if not skip_invalid:
                raise
            logger.warning(f"Skipping review: {e}")
    return responses
