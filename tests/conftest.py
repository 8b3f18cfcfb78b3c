"""Shared fixtures: in-memory stand-ins for Playwright pages and contexts."""

import os
import sys
from datetime import datetime
from typing import Dict, List, Optional

import pytest

# Allow running the suite from a checkout without installing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tubescraper.config import Delays, RunSettings


def card(video_id: str, title: Optional[str] = None, ago: Optional[str] = "1 hour ago", href: Optional[str] = None):
    """One raw listing card as the in-page script returns it."""
    return {
        "title": title if title is not None else f"Video {video_id}",
        "href": href if href is not None else f"/watch?v={video_id}",
        "uploadTimeText": ago,
    }


def watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


class FakeListingPage:
    """Serves one pre-scripted batch of cards per extraction call."""

    def __init__(self, batches: List[List[dict]], fail_on_wait: Optional[Exception] = None):
        self.batches = list(batches)
        self.fail_on_wait = fail_on_wait
        self.extract_calls = 0
        self.scrolls = 0
        self.clicks: List[str] = []
        self.visited: List[str] = []
        self.closed = False

    async def goto(self, url, wait_until=None):
        self.visited.append(url)

    async def wait_for_selector(self, selector, timeout=None):
        if self.fail_on_wait:
            raise self.fail_on_wait

    async def click(self, selector):
        self.clicks.append(selector)

    async def wait_for_timeout(self, ms):
        pass

    async def evaluate(self, script, arg=None):
        if "scrollBy" in script:
            self.scrolls += 1
            return None
        self.extract_calls += 1
        return self.batches.pop(0) if self.batches else []

    async def close(self):
        self.closed = True


class FakeDetailPage:
    """Detail page whose in-page script result is looked up by url."""

    def __init__(self, pages: Dict[str, dict], failing: tuple = ()):
        self.pages = pages
        self.failing = failing
        self.url: Optional[str] = None
        self.closed = False

    async def goto(self, url, wait_until=None):
        if url in self.failing:
            raise RuntimeError(f"navigation failed for {url}")
        self.url = url

    async def wait_for_timeout(self, ms):
        pass

    async def query_selector(self, selector):
        return None

    async def evaluate(self, script, arg=None):
        if "scrollBy" in script:
            return None
        return self.pages.get(self.url, {"href": self.url})

    async def close(self):
        self.closed = True


class FakeContext:
    def __init__(self, factory):
        self.factory = factory
        self.pages = []

    async def new_page(self):
        page = self.factory()
        self.pages.append(page)
        return page


@pytest.fixture
def fast_settings() -> RunSettings:
    return RunSettings(delays=Delays.none(), max_rounds=20, stagnant_tolerance=2)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 6, 15, 12, 0, 0)
