"""
Play Store Domain Entities

Records produced by the extraction pipeline.
All entities are immutable (frozen dataclasses) with tuple-based collections.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

STORE_BASE_URL = "https://play.google.com"


def details_url(app_id: str) -> str:
    """Public listing URL for an app."""
    return f"{STORE_BASE_URL}/store/apps/details?id={app_id}"


def review_url(review_id: str) -> str:
    return f"{STORE_BASE_URL}/store/apps/details?reviewId={review_id}"


@dataclass(frozen=True)
class RatingHistogram:
    """Number of ratings per star bucket."""
    one_star: int = 0
    two_star: int = 0
    three_star: int = 0
    four_star: int = 0
    five_star: int = 0

    @property
    def total(self) -> int:
        return (
            self.one_star
            + self.two_star
            + self.three_star
            + self.four_star
            + self.five_star
        )


@dataclass(frozen=True)
class App:
    """
    Summary of an app as it appears in listings.

    Used for developer pages, similar apps, category charts and search.
    """
    app_id: str
    title: str
    summary: str = ""
    developer: str = ""
    icon_url: str = ""
    url: str = ""
    score: Optional[float] = None
    score_text: Optional[str] = None
    price: Optional[float] = None
    price_text: Optional[str] = None
    currency: Optional[str] = None
    is_free: bool = True


@dataclass(frozen=True)
class AppDetails:
    """
    Full detail page of an app.

    `missing_fields` names the mapped fields that could not be resolved on
    the page. A long list usually means the page layout changed rather than
    the listing being sparse.
    """
    app_id: str
    url: str = ""

    # Basic information
    title: str = ""
    description_html: str = ""
    summary: str = ""

    # Installs and ratings
    installs: str = "0"
    min_installs: int = 0
    max_installs: int = 0
    score: Optional[float] = None
    score_text: Optional[str] = None
    ratings: Optional[int] = None
    reviews: Optional[int] = None
    histogram: Optional[RatingHistogram] = None

    # Price
    price: Optional[float] = None
    price_text: Optional[str] = None
    currency: Optional[str] = None
    is_free: bool = True
    offers_iap: bool = False
    iap_range: Optional[str] = None

    # Media
    icon_url: str = ""
    header_image: Optional[str] = None
    screenshots: tuple = field(default_factory=tuple)  # tuple[str, ...]
    video: Optional[str] = None
    video_image: Optional[str] = None

    # Developer
    developer: str = ""
    developer_id: Optional[str] = None
    developer_email: Optional[str] = None
    developer_website: Optional[str] = None
    developer_address: Optional[str] = None

    # Technical information
    genre: Optional[str] = None
    genre_id: Optional[str] = None
    family_genre: Optional[str] = None
    family_genre_id: Optional[str] = None
    app_size: Optional[str] = None
    android_version: Optional[str] = None
    content_rating: Optional[str] = None
    content_rating_description: Optional[str] = None
    ad_supported: bool = False
    contains_ads: bool = False

    # Update information
    release_date: Optional[date] = None
    last_update: Optional[datetime] = None
    current_version: Optional[str] = None
    recent_changes: Optional[str] = None

    # Other
    privacy_policy: Optional[str] = None
    similar_apps: tuple = field(default_factory=tuple)  # tuple[str, ...]

    missing_fields: tuple = field(default_factory=tuple)  # tuple[str, ...]

    @property
    def is_complete(self) -> bool:
        """True when every mapped field resolved."""
        return not self.missing_fields


@dataclass(frozen=True)
class AppReview:
    """A single user review, with the developer reply if there is one."""
    review_id: str
    user_name: str
    date: datetime
    score: int
    text: str = ""
    url: Optional[str] = None
    user_image: Optional[str] = None
    score_text: Optional[str] = None
    title: Optional[str] = None
    reply_date: Optional[datetime] = None
    reply_text: Optional[str] = None
    version: Optional[str] = None
    thumbs_up_count: int = 0
    criteria_id: Optional[int] = None


@dataclass(frozen=True)
class Permission:
    """A permission or data-safety entry declared by an app."""
    type: str
    description: str = ""
