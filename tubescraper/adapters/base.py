from dataclasses import dataclass, field          # dataclass creates lightweight, readable data objects
from typing import Any, Dict, List, Optional, Tuple, Union


@dataclass
class CandidateResult:                             # One search hit discovered on the results listing
    title: str                                     # Title text as rendered on the listing
    url: str                                       # Absolute watch url (natural dedup key)
    upload_time_text: Optional[str] = None         # Relative upload time, e.g. "3 hours ago"


@dataclass(frozen=True)
class Channel:
    id: str = ""
    name: str = ""
    url: str = ""
    subscribers: Union[str, int] = 0               # Compact string such as "421K", 0 when absent


@dataclass(frozen=True)
class Thumbnail:
    url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass(frozen=True)
class LiveInfo:
    is_live: bool = False
    start_date: Optional[str] = None
    end_date: Optional[str] = None


@dataclass(frozen=True)
class VideoDetailRecord:
    """Normalized detail page of one video.

    Every field has a default so a record can always be produced, even
    from a page where nothing matched. Records are immutable once built.
    """

    id: Optional[str]
    url: str
    title: str
    description: str = ""
    genre: str = ""
    keywords: Tuple[str, ...] = ()
    is_family_friendly: Optional[str] = None
    embed_url: Optional[str] = None
    publish_date: Optional[str] = None
    upload_date: Optional[str] = None
    duration: Optional[str] = None
    views: Optional[int] = None
    likes: int = 0
    dislikes: int = 0
    comment_count: int = 0
    channel: Channel = field(default_factory=Channel)
    thumbnail: Thumbnail = field(default_factory=Thumbnail)
    live: LiveInfo = field(default_factory=LiveInfo)
    type: str = "video"

    def to_dict(self) -> Dict[str, Any]:
        """Dataset representation, camelCase keys; ``views`` is left out when unknown."""
        data: Dict[str, Any] = {
            "type": self.type,
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "description": self.description,
            "publishDate": self.publish_date,
            "uploadDate": self.upload_date,
            "duration": self.duration,
            "views": self.views,
            "likes": self.likes,
            "dislikes": self.dislikes,
            "commentCount": self.comment_count,
            "thumbnail": {
                "url": self.thumbnail.url,
                "width": self.thumbnail.width,
                "height": self.thumbnail.height,
            },
            "channel": {
                "id": self.channel.id,
                "name": self.channel.name,
                "url": self.channel.url,
                "subscribers": self.channel.subscribers,
            },
            "embedUrl": self.embed_url,
            "isLive": self.live.is_live,
            "isFamilyFriendly": self.is_family_friendly,
            "genre": self.genre,
            "keywords": list(self.keywords),
            "live": {
                "isLive": self.live.is_live,
                "startDate": self.live.start_date,
                "endDate": self.live.end_date,
            },
        }
        if self.views is None:
            del data["views"]
        return data


class SiteAdapter:                                 # Base class describing the one site shape we scrape
    name: str = "base"                             # Human-readable adapter name
    domains: List[str] = []                        # Host suffixes owned by this site
    base_url: str = ""                             # Prefix for relative hrefs
    short_form_path: str = ""                      # Path prefix of excluded short-form items
    title_suffix: str = ""                         # Suffix appended to <title> by the site

    RESULT_ITEM: str = ""                          # Selector of one result card on the listing

    def search_url(self, term: str) -> str:
        raise NotImplementedError

    async def navigate_search(self, page, term: str, delays) -> None:
        """Open the listing for ``term`` and wait for the first batch."""
        raise NotImplementedError

    async def apply_recent_sort(self, page, delays) -> None:
        """Switch the listing to most-recent-first ordering."""
        raise NotImplementedError

    async def extract_visible(self, page) -> List[Dict[str, Any]]:
        """Return raw ``{title, href, uploadTimeText}`` dicts for not-yet-seen cards."""
        raise NotImplementedError

    async def open_detail(self, page, url: str, delays) -> None:
        """Navigate a fresh page to a detail url and reveal lazy content."""
        raise NotImplementedError

    async def read_detail(self, page) -> Dict[str, Any]:
        """Return the raw detail-page dictionary consumed by the normalizer."""
        raise NotImplementedError

    def absolute_url(self, href: Optional[str]) -> str:
        if not href:
            return ""
        if href.startswith("/"):
            return f"{self.base_url}{href}"
        return href
