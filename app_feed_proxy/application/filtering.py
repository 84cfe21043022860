"""
Recency filtering of reviews.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from .domain import ReviewEntry

logger = logging.getLogger(__name__)

_RFC3339 = re.compile(
    r"\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})",
    re.ASCII,
)


def parse_timestamp(value: str) -> Optional[datetime]:
    """
    Parse an RFC3339 timestamp into an aware datetime.

    Returns None when the value cannot be parsed or carries no UTC offset,
    since such a value cannot be compared against the cutoff.
    """
    if not _RFC3339.fullmatch(value):
        return None
    try:
        return datetime.fromisoformat(value.upper())
    except ValueError:
        return None


def filter_recent(
    reviews: Iterable[ReviewEntry],
    hours: Optional[int],
    now: Optional[datetime] = None,
) -> List[ReviewEntry]:
    """
    Keep only the reviews posted strictly after `now - hours`.

    Args:
        reviews: Reviews in upstream order.
        hours: Size of the recency window. 0 or None disables the window.
        now: Reference time, defaults to the current UTC time.

    Returns:
        The surviving reviews in their original order. Reviews whose
        timestamp cannot be parsed are dropped under every window.
    """
    cutoff = None
    if hours:
        now = now or datetime.now(timezone.utc)
        try:
            cutoff = now - timedelta(hours=hours)
        except OverflowError:
            # Window reaches past datetime.min; nothing can be older.
            cutoff = None

    recent = []
    for review in reviews:
        posted_at = parse_timestamp(review.timestamp)
        if posted_at is None:
            logger.debug(
                f"Failed to parse timestamp {review.timestamp!r} of review "
                f"{review.review_id!r}, skipping"
            )
            continue
        if cutoff is None or posted_at > cutoff:
            recent.append(review)

    return recent
