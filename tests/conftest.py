import json

import httpx
import pytest


def _app_entry(app_id, name, link):
    return {
        "im:name": {"label": name},
        "im:image": [
            {"label": f"https://example.com/{app_id}/53x53.png", "attributes": {"height": "53"}},
            {"label": f"https://example.com/{app_id}/75x75.png", "attributes": {"height": "75"}},
        ],
        "summary": {"label": f"{name} summary"},
        "im:price": {"label": "Get", "attributes": {"amount": "0.00", "currency": "USD"}},
        "im:contentType": {"attributes": {"term": "Application", "label": "Application"}},
        "rights": {"label": "© 2023 Test Developer"},
        "title": {"label": f"{name} - Test Developer"},
        "link": link,
        "id": {
            "label": f"https://apps.apple.com/us/app/id{app_id}",
            "attributes": {"im:id": app_id, "im:bundleId": f"com.test.app{app_id}"},
        },
        "im:artist": {"label": "Test Developer", "attributes": {"href": "https://example.com/dev"}},
        "category": {
            "attributes": {
                "im:id": "6014",
                "term": "Games",
                "scheme": "https://apps.apple.com/us/genre/id6014",
                "label": "Games",
            }
        },
        "im:releaseDate": {
            "label": "2023-01-01T00:00:00-07:00",
            "attributes": {"label": "January 1, 2023"},
        },
    }


CATALOG_FEED = {
    "feed": {
        "entry": [
            _app_entry(
                "1",
                "Test App 1",
                [
                    {"attributes": {"rel": "alternate", "type": "text/html", "href": "https://apps.apple.com/us/app/test-app-1/id1"}},
                    {"attributes": {"title": "Preview", "rel": "enclosure", "type": "image/jpeg", "href": "https://example.com/1/preview.jpg", "im:assetType": "preview"}},
                ],
            ),
            _app_entry(
                "2",
                "Test App 2",
                {"attributes": {"rel": "alternate", "type": "text/html", "href": "https://apps.apple.com/us/app/test-app-2/id2"}},
            ),
        ]
    }
}


def _review_entry(review_id, author, content, rating, updated):
    return {
        "id": {"label": review_id},
        "author": {"name": {"label": author}, "uri": {"label": "https://example.com/user"}},
        "content": {"label": content, "attributes": {"type": "text"}},
        "im:rating": {"label": rating},
        "updated": {"label": updated},
    }


REVIEW_FEED = {
    "feed": {
        "entry": [
            _review_entry("1", "User1", "Great app!", "5", "2023-08-21T09:00:00Z"),
            _review_entry("2", "User2", "It's ok.", "3", "2023-08-21T08:00:00Z"),
            _review_entry("3", "User3", "Terrible.", "1", "2023-08-20T00:00:00Z"),
        ]
    }
}


def review_feed_with(*entries):
    return json.dumps({"feed": {"entry": [_review_entry(*entry) for entry in entries]}})


@pytest.fixture
def catalog_payload():
    return json.dumps(CATALOG_FEED)


@pytest.fixture
def review_payload():
    return json.dumps(REVIEW_FEED)


@pytest.fixture
def make_client():
    """Builds an httpx.AsyncClient answering every request through `handler`."""

    def _make(handler):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make
