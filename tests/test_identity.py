import pytest

from tubescraper.utils.identity import canonicalize, is_short_form, resolve_video_id, watch_id


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://www.youtube.com/shorts/abc123", True),
        ("https://m.youtube.com/shorts/abc123?feature=share", True),
        ("https://www.youtube.com/watch?v=abc123", False),
        ("https://www.youtube.com/channel/shorts/", False),
        ("https://example.com/shorts/abc123", False),
        ("not a url", False),
        ("", False),
        ("http://[::1", False),
    ],
)
def test_is_short_form(url, expected):
    assert is_short_form(url) is expected


@pytest.mark.parametrize(
    "url, video_id",
    [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/live/abc987", "abc987"),
        ("https://youtu.be/xyz/", "xyz"),
        ("https://www.youtube.com/", None),
        (None, None),
    ],
)
def test_resolve_video_id(url, video_id):
    assert resolve_video_id(url) == video_id


def test_canonicalize_keeps_literal_url_as_key():
    url = "https://www.youtube.com/watch?v=abc&pp=xyz"
    identity = canonicalize(url)
    assert identity.url == url
    assert identity.video_id == "abc"
    assert identity.is_short_form is False


@pytest.mark.parametrize(
    "url, video_id",
    [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42", "dQw4w9WgXcQ"),
        ("https://www.youtube.com/watch", None),
        ("https://www.youtube.com/watch?v=", None),
        ("https://www.youtube.com/live/abc987", None),
        ("http://[::1", None),
        (None, None),
    ],
)
def test_watch_id_requires_v_parameter(url, video_id):
    assert watch_id(url) == video_id
