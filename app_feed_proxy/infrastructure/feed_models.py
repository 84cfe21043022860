"""
Pydantic models for validating the structure of the upstream RSS JSON feeds.

The feeds wrap every scalar in `{"label": ..., "attributes": {...}}`
envelopes and omit fields freely, so every envelope value defaults to an
empty string. Only the top-level `feed` envelope and the shape of the
polymorphic `link` field are enforced; anything else that deviates is
caught here and reported as a DecodeError before reaching the application
core.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..application.domain import CatalogEntry, Link, ReviewEntry
from ..application.exceptions import DecodeError


class Envelope(BaseModel):
    """A field carrying only a `label`."""

    label: str = ""


# --- Catalog entry envelopes ---

class AppIdAttributes(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field("", alias="im:id")
    bundle_id: str = Field("", alias="im:bundleId")


class AppIdField(Envelope):
    attributes: AppIdAttributes = AppIdAttributes()


class CategoryAttributes(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field("", alias="im:id")
    term: str = ""
    scheme: str = ""
    label: str = ""


class CategoryField(BaseModel):
    attributes: CategoryAttributes = CategoryAttributes()


class ReleaseDateAttributes(BaseModel):
    label: str = ""


class ReleaseDateField(Envelope):
    attributes: ReleaseDateAttributes = ReleaseDateAttributes()


class LinkAttributes(BaseModel):
    rel: str = ""
    type: str = ""
    href: str = ""
    title: str = ""


class LinkField(BaseModel):
    attributes: LinkAttributes = LinkAttributes()

    def to_domain(self) -> Link:
        return Link(
            rel=self.attributes.rel,
            type=self.attributes.type,
            href=self.attributes.href,
            title=self.attributes.title,
        )


class FeedApp(BaseModel):
    """Represents a single application entry of the catalog feed."""

    model_config = ConfigDict(populate_by_name=True)

    id: AppIdField = AppIdField()
    name: Envelope = Field(Envelope(), alias="im:name")
    artist: Envelope = Field(Envelope(), alias="im:artist")
    release_date: ReleaseDateField = Field(
        ReleaseDateField(), alias="im:releaseDate"
    )
    category: CategoryField = CategoryField()
    images: List[Envelope] = Field(default_factory=list, alias="im:image")
    # Either one link object or an array of them.
    link: Union[LinkField, List[LinkField], None] = None
    price: Envelope = Field(Envelope(), alias="im:price")
    rights: Envelope = Envelope()
    summary: Envelope = Envelope()
    title: Envelope = Envelope()

    def resolved_links(self) -> List[LinkField]:
        if self.link is None:
            return []
        if isinstance(self.link, LinkField):
            return [self.link]
        return list(self.link)

    def to_domain(self) -> CatalogEntry:
        return CatalogEntry(
            app_id=self.id.attributes.id,
            bundle_id=self.id.attributes.bundle_id,
            name=self.name.label,
            author=self.artist.label,
            release_date=self.release_date.attributes.label,
            category=self.category.attributes.label,
            artwork_urls=tuple(image.label for image in self.images),
            links=tuple(link.to_domain() for link in self.resolved_links()),
            price=self.price.label,
            rights=self.rights.label,
            summary=self.summary.label,
            title=self.title.label,
        )


# --- Review entry envelopes ---

class AuthorField(BaseModel):
    name: Envelope = Envelope()


class FeedReview(BaseModel):
    """Represents a single review entry of the review feed."""

    model_config = ConfigDict(populate_by_name=True)

    id: Envelope = Envelope()
    author: AuthorField = AuthorField()
    content: Envelope = Envelope()
    rating: Envelope = Field(Envelope(), alias="im:rating")
    updated: Envelope = Envelope()

    def to_domain(self) -> ReviewEntry:
        return ReviewEntry(
            review_id=self.id.label,
            author=self.author.name.label,
            content=self.content.label,
            rating=self.rating.label,
            timestamp=self.updated.label,
        )


# --- Top-level feed envelopes ---

class CatalogFeed(BaseModel):
    entries: List[FeedApp] = Field(default_factory=list, alias="entry")

    @field_validator("entries", mode="before")
    @classmethod
    def wrap_single_entry(cls, value):
        # A feed holding exactly one entry sends a bare object.
        if isinstance(value, dict):
            return [value]
        return value


class CatalogRoot(BaseModel):
    """Represents the top-level structure of the catalog feed."""

    feed: CatalogFeed


class ReviewFeed(BaseModel):
    entries: List[FeedReview] = Field(default_factory=list, alias="entry")

    @field_validator("entries", mode="before")
    @classmethod
    def wrap_single_entry(cls, value):
        # A feed holding exactly one entry sends a bare object.
        if isinstance(value, dict):
            return [value]
        return value


class ReviewRoot(BaseModel):
    """Represents the top-level structure of the review feed."""

    feed: ReviewFeed


def _validate(model, payload: Union[bytes, str], what: str):
    try:
        return model.model_validate_json(payload)
    except ValidationError as e:
        raise DecodeError(
            f"Malformed {what} payload: {e.error_count()} validation "
            f"error(s), first: {_first_error(e)}"
        ) from e


def _first_error(error: ValidationError) -> Optional[str]:
    errors = error.errors()
    if not errors:
        return None
    location = ".".join(str(part) for part in errors[0]["loc"])
    return f"{location}: {errors[0]['msg']}"


def decode_catalog(payload: Union[bytes, str]) -> List[CatalogEntry]:
    """
    Decodes a raw catalog feed into domain records, in upstream order.

    Raises:
        DecodeError: If the payload is not JSON or does not match the
            feed/entry envelope, including a `link` field that is neither
            an object nor an array of objects.
    """
    root = _validate(CatalogRoot, payload, "catalog")
    return [app.to_domain() for app in root.feed.entries]


def decode_reviews(payload: Union[bytes, str]) -> List[ReviewEntry]:
    """
    Decodes a raw review feed into domain records, in upstream order.

    Raises:
        DecodeError: If the payload does not match the feed/entry envelope.
    """
    root = _validate(ReviewRoot, payload, "review")
    return [review.to_domain() for review in root.feed.entries]
