import json

import pytest

from app_feed_proxy.application.domain import Link
from app_feed_proxy.application.exceptions import DecodeError
from app_feed_proxy.infrastructure.feed_models import decode_catalog, decode_reviews

from conftest import CATALOG_FEED


def test_decode_catalog_preserves_order_and_fields(catalog_payload):
    entries = decode_catalog(catalog_payload)

    assert [entry.name for entry in entries] == ["Test App 1", "Test App 2"]
    first = entries[0]
    assert first.app_id == "1"
    assert first.bundle_id == "com.test.app1"
    assert first.author == "Test Developer"
    assert first.release_date == "January 1, 2023"
    assert first.category == "Games"
    assert first.artwork_urls == (
        "https://example.com/1/53x53.png",
        "https://example.com/1/75x75.png",
    )
    assert first.price == "Get"
    assert first.rights == "© 2023 Test Developer"
    assert first.summary == "Test App 1 summary"
    assert first.title == "Test App 1 - Test Developer"


def test_decode_catalog_resolves_link_array_and_single_link(catalog_payload):
    first, second = decode_catalog(catalog_payload)

    assert len(first.links) == 2
    assert first.links[1] == Link(
        rel="enclosure",
        type="image/jpeg",
        href="https://example.com/1/preview.jpg",
        title="Preview",
    )
    assert second.links == (
        Link(
            rel="alternate",
            type="text/html",
            href="https://apps.apple.com/us/app/test-app-2/id2",
        ),
    )


def test_decode_catalog_rejects_link_of_unexpected_shape():
    payload = {"feed": {"entry": [{"im:name": {"label": "Broken"}, "link": "nope"}]}}

    with pytest.raises(DecodeError):
        decode_catalog(json.dumps(payload))


def test_decode_catalog_tolerates_missing_envelopes():
    payload = {"feed": {"entry": [{"im:name": {"label": "Bare"}, "id": {}}]}}

    (entry,) = decode_catalog(json.dumps(payload))

    assert entry.name == "Bare"
    assert entry.app_id == ""
    assert entry.author == ""
    assert entry.release_date == ""
    assert entry.artwork_urls == ()
    assert entry.links == ()


def test_decode_catalog_accepts_single_entry_object():
    payload = {"feed": {"entry": CATALOG_FEED["feed"]["entry"][0]}}

    entries = decode_catalog(json.dumps(payload))

    assert [entry.name for entry in entries] == ["Test App 1"]


def test_decode_catalog_without_entries_is_empty():
    assert decode_catalog('{"feed": {"author": {"name": {"label": "iTunes"}}}}') == []


@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        '{"results": []}',
        '{"feed": {"entry": "invalid"}}',
        '{"feed": []}',
    ],
)
def test_decode_catalog_rejects_malformed_envelope(payload):
    with pytest.raises(DecodeError):
        decode_catalog(payload)


def test_decode_reviews(review_payload):
    reviews = decode_reviews(review_payload)

    assert [review.review_id for review in reviews] == ["1", "2", "3"]
    assert reviews[0].author == "User1"
    assert reviews[0].content == "Great app!"
    assert reviews[0].rating == "5"
    assert reviews[0].timestamp == "2023-08-21T09:00:00Z"


def test_decode_reviews_accepts_bytes(review_payload):
    assert len(decode_reviews(review_payload.encode("utf-8"))) == 3


def test_decode_reviews_rejects_malformed_payload():
    with pytest.raises(DecodeError):
        decode_reviews(b'{"feed": {"entry": 42}}')
