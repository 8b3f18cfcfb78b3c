from dataclasses import dataclass
from typing import Iterable, Optional
from urllib.parse import parse_qs, urlparse


@dataclass(frozen=True)
class CandidateIdentity:
    url: str                      # literal url, used as the dedup key
    video_id: Optional[str]
    is_short_form: bool


def watch_id(url: Optional[str]) -> Optional[str]:
    """``v`` query parameter only; None for urls that are not watch links."""
    if not url:
        return None
    try:
        v = parse_qs(urlparse(url).query).get("v")
    except ValueError:
        return None
    return v[0] if v and v[0] else None


def resolve_video_id(url: Optional[str]) -> Optional[str]:
    """``v`` query parameter if present, else the last path segment."""
    if not url:
        return None
    try:
        parsed = urlparse(url)
    except ValueError:
        return None
    v = parse_qs(parsed.query).get("v")
    if v and v[0]:
        return v[0]
    segments = [s for s in parsed.path.split("/") if s]
    return segments[-1] if segments else None


def is_short_form(url: str, domains: Iterable[str] = ("youtube.com",), path_prefix: str = "/shorts/") -> bool:
    try:
        parsed = urlparse(url)
        host = (parsed.hostname or "").lower()
    except ValueError:
        return False
    if not host:
        return False
    return any(host.endswith(d) for d in domains) and parsed.path.startswith(path_prefix)


def canonicalize(url: str, domains: Iterable[str] = ("youtube.com",), path_prefix: str = "/shorts/") -> CandidateIdentity:
    return CandidateIdentity(
        url=url,
        video_id=resolve_video_id(url),
        is_short_form=is_short_form(url, domains, path_prefix),
    )
