"""
Turns the raw detail-page dictionary returned by the in-page script into a
VideoDetailRecord. Nothing here touches the browser, and nothing raises for a
missing field: every lookup falls back to the record's default.
"""

import re
from typing import Any, Dict, List, Optional, Union

from tubescraper.adapters.base import Channel, LiveInfo, Thumbnail, VideoDetailRecord
from tubescraper.utils.identity import resolve_video_id

PLATFORM_URL = "https://www.youtube.com"
TITLE_SUFFIX = " - YouTube"

_FIRST_NUMBER_RE = re.compile(r"(\d[\d,]*)")
_SUBSCRIBERS_RE = re.compile(r"^([\d,.]+[KMB]?)\s*subscribers?$", re.IGNORECASE)
_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


def extract_number(text: Optional[str]) -> int:
    """First run of digits, commas ignored; 0 when there is none."""
    if not text:
        return 0
    match = _FIRST_NUMBER_RE.search(text)
    if not match:
        return 0
    return int(match.group(1).replace(",", ""))


def extract_views(text: Optional[str]) -> Optional[int]:
    # Unlike counts, an unknown view total stays unknown
    match = _FIRST_NUMBER_RE.search((text or "").replace(",", ""))
    return int(match.group(1)) if match else None


def extract_subscriber_count(text: Optional[str]) -> Union[str, int]:
    """
    "421K subscribers" -> "421K". The compact notation is kept verbatim.
    Missing text gives 0, text that does not look like a count gives "".
    """
    if not text:
        return 0
    match = _SUBSCRIBERS_RE.match(text.strip())
    return match.group(1) if match else ""


def parse_iso_duration(value: Optional[str]) -> Optional[str]:
    """PT8M24S -> 08:24, PT1H5M -> 01:05:00. None in, None out."""
    if not value:
        return None
    match = _DURATION_RE.search(value)
    hours, mins, secs = (int(g or 0) for g in (match.groups() if match else (None, None, None)))
    if hours:
        return f"{hours:02d}:{mins:02d}:{secs:02d}"
    return f"{mins:02d}:{secs:02d}"


def strip_title_suffix(title: Optional[str], suffix: str = TITLE_SUFFIX) -> str:
    title = title or ""
    if suffix and title.endswith(suffix):
        return title[: -len(suffix)]
    return title


def split_keywords(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [k.strip() for k in value.split(",") if k.strip()]


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = raw.get(key)
    return value if isinstance(value, dict) else {}


def _channel(raw: Dict[str, Any], base_url: str) -> Channel:
    href = raw.get("channelHref") or ""
    url = f"{base_url}{href}" if href else ""
    return Channel(
        id=url.rstrip("/").split("/")[-1] if url else "",
        name=raw.get("channelName") or "",
        url=url,
        subscribers=extract_subscriber_count(raw.get("subscriberText")),
    )


def _live(raw: Dict[str, Any]) -> LiveInfo:
    block = raw.get("live")
    if not isinstance(block, dict):
        return LiveInfo()
    return LiveInfo(
        is_live=block.get("isLiveBroadcast") == "True",
        start_date=block.get("startDate") or None,
        end_date=block.get("endDate") or None,
    )


def extract_detail(
    raw: Optional[Dict[str, Any]],
    fallback_url: str = "",
    base_url: str = PLATFORM_URL,
    title_suffix: str = TITLE_SUFFIX,
) -> VideoDetailRecord:
    """Map one raw detail page onto the output schema."""
    raw = raw or {}
    url = raw.get("href") or fallback_url
    thumb = _section(raw, "thumbnail")

    return VideoDetailRecord(
        id=resolve_video_id(url),
        url=url,
        title=strip_title_suffix(raw.get("documentTitle"), title_suffix),
        description=raw.get("description") or "",
        genre=raw.get("genre") or "",
        keywords=tuple(split_keywords(raw.get("keywords"))),
        is_family_friendly=raw.get("isFamilyFriendly") or None,
        embed_url=raw.get("embedUrl") or None,
        publish_date=raw.get("datePublished") or None,
        upload_date=raw.get("uploadDate") or None,
        duration=parse_iso_duration(raw.get("duration")),
        views=extract_views(raw.get("viewText")),
        likes=extract_number(raw.get("likeLabel")),
        dislikes=extract_number(raw.get("dislikeLabel")),
        comment_count=extract_number(raw.get("commentText")),
        channel=_channel(raw, base_url),
        thumbnail=Thumbnail(
            url=thumb.get("url") or None,
            width=_to_int(thumb.get("width")),
            height=_to_int(thumb.get("height")),
        ),
        live=_live(raw),
    )
