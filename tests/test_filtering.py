from datetime import datetime, timedelta, timezone

import pytest

from app_feed_proxy.application.domain import ReviewEntry
from app_feed_proxy.application.filtering import filter_recent, parse_timestamp
from app_feed_proxy.infrastructure.feed_models import decode_reviews

NOW = datetime(2023, 8, 21, 9, 0, 1, tzinfo=timezone.utc)


def _review(review_id, timestamp):
    return ReviewEntry(review_id=review_id, rating="5", timestamp=timestamp)


def _ids(reviews):
    return [review.review_id for review in reviews]


def test_window_of_24_hours_keeps_same_day_reviews(review_payload):
    reviews = decode_reviews(review_payload)

    assert _ids(filter_recent(reviews, 24, now=NOW)) == ["1", "2"]


@pytest.mark.parametrize("hours", [0, None])
def test_no_window_returns_everything_in_order(review_payload, hours):
    reviews = decode_reviews(review_payload)

    assert _ids(filter_recent(reviews, hours, now=NOW)) == ["1", "2", "3"]


def test_cutoff_is_strict():
    cutoff = NOW - timedelta(hours=1)
    reviews = [
        _review("at", cutoff.isoformat()),
        _review("after", (cutoff + timedelta(seconds=1)).isoformat()),
        _review("before", (cutoff - timedelta(seconds=1)).isoformat()),
    ]

    kept = filter_recent(reviews, 1, now=NOW)

    assert _ids(kept) == ["after"]
    for review in kept:
        assert parse_timestamp(review.timestamp) > cutoff


def test_offsets_are_compared_as_instants():
    # 02:30 at -07:00 is 09:30 UTC, inside a one hour window.
    reviews = [_review("pdt", "2023-08-21T02:30:00-07:00")]

    assert _ids(filter_recent(reviews, 1, now=NOW + timedelta(minutes=30))) == ["pdt"]


@pytest.mark.parametrize("hours", [0, None, 1, 24, 10_000])
def test_unparseable_timestamps_are_always_dropped(hours):
    reviews = [
        _review("good", "2023-08-21T08:59:00Z"),
        _review("garbage", "yesterday"),
        _review("empty", ""),
        _review("date-only", "2023-08-21"),
        _review("naive", "2023-08-21T08:59:00"),
    ]

    assert _ids(filter_recent(reviews, hours, now=NOW)) == ["good"]


@pytest.mark.parametrize(
    "value",
    ["2023-08-21T09:00:00Z", "2023-08-21T09:00:00-07:00", "2023-08-21T09:00:00.123+02:00"],
)
def test_parse_timestamp_accepts_rfc3339(value):
    parsed = parse_timestamp(value)

    assert parsed is not None
    assert parsed.tzinfo is not None


@pytest.mark.parametrize(
    "value",
    [
        "2023-08-21T09:00+00:00",
        "20230821T090000Z",
        "2023-W34-1T09:00:00+00:00",
        "2023-08-21T09+00:00",
        "2023-08-21 09:00:00Z",
        "2023-08-21T09:00:00+0000",
    ],
)
def test_iso8601_forms_outside_rfc3339_are_dropped(value):
    reviews = [_review("good", "2023-08-21T08:59:00Z"), _review("iso", value)]

    assert parse_timestamp(value) is None
    assert _ids(filter_recent(reviews, None, now=NOW)) == ["good"]


def test_parse_timestamp_accepts_lowercase_separators():
    assert parse_timestamp("2023-08-21t09:00:00z") == datetime(
        2023, 8, 21, 9, tzinfo=timezone.utc
    )


def test_window_beyond_representable_range_keeps_everything():
    reviews = [_review("1", "2023-08-21T08:00:00Z"), _review("old", "0001-01-02T00:00:00Z")]

    assert _ids(filter_recent(reviews, 100_000_000, now=NOW)) == ["1", "old"]
