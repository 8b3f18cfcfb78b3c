import logging
from typing import Any, Dict, List
from urllib.parse import quote

from tubescraper.adapters.base import SiteAdapter

logger = logging.getLogger(__name__)


# Marks listing cards that were already returned once, so each round only
# reports what scrolling newly rendered. Cards whose link has no href yet are
# left unmarked and picked up on a later round.
_LISTING_SCRIPT = """
(selector) => {
    const nodes = Array.from(document.querySelectorAll(selector + ':not([data-tubescraper-seen])'));
    const ready = nodes.filter((node) => {
        const link = node.querySelector('#video-title');
        return !!(link && link.getAttribute('href'));
    });
    return ready.map((node) => {
        node.setAttribute('data-tubescraper-seen', '1');
        const link = node.querySelector('#video-title');
        const spans = Array.from(node.querySelectorAll('#metadata-line span'));
        const timeSpan = spans.find((s) => /ago/i.test(s.textContent || ''));
        return {
            title: link && link.textContent ? link.textContent.trim() : '',
            href: link ? link.getAttribute('href') : null,
            uploadTimeText: timeSpan ? timeSpan.textContent.trim() : null,
        };
    });
}
"""

# Only raw text and attribute values leave the page; all parsing happens in
# tubescraper.utils.normalize.
_DETAIL_SCRIPT = """
() => {
    const text = (sel, root) => {
        const el = (root || document).querySelector(sel);
        return el && el.textContent ? el.textContent.trim() : null;
    };
    const attr = (sel, name, root) => {
        const el = (root || document).querySelector(sel);
        return el ? el.getAttribute(name) : null;
    };
    const buttons = document.querySelector('#top-row #top-level-buttons-computed');
    const thumbEl = document.querySelector('span[itemprop="thumbnail"]');
    const liveEl = document.querySelector('span[itemprop="publication"][itemtype*="BroadcastEvent"]');
    return {
        href: window.location.href,
        documentTitle: document.title,
        description: text('#bottom-row ytd-text-inline-expander yt-attributed-string'),
        channelName: text('ytd-channel-name a'),
        channelHref: attr('ytd-channel-name a', 'href'),
        subscriberText: text('#above-the-fold #upload-info #owner-sub-count'),
        viewText: text('.view-count') || text('span.view-count'),
        likeLabel: buttons ? attr('like-button-view-model button-view-model button', 'aria-label', buttons) : null,
        dislikeLabel: buttons ? attr('dislike-button-view-model button-view-model button', 'aria-label', buttons) : null,
        duration: attr('meta[itemprop="duration"]', 'content'),
        datePublished: attr('meta[itemprop="datePublished"]', 'content'),
        uploadDate: attr('meta[itemprop="uploadDate"]', 'content'),
        embedUrl: attr('link[itemprop="embedUrl"]', 'href'),
        isFamilyFriendly: attr('meta[itemprop="isFamilyFriendly"]', 'content'),
        keywords: attr('meta[name="keywords"]', 'content'),
        genre: attr('meta[itemprop="genre"]', 'content'),
        thumbnail: thumbEl ? {
            url: attr('link[itemprop="url"]', 'href', thumbEl),
            width: attr('meta[itemprop="width"]', 'content', thumbEl),
            height: attr('meta[itemprop="height"]', 'content', thumbEl),
        } : null,
        live: liveEl ? {
            isLiveBroadcast: attr('meta[itemprop="isLiveBroadcast"]', 'content', liveEl),
            startDate: attr('meta[itemprop="startDate"]', 'content', liveEl),
            endDate: attr('meta[itemprop="endDate"]', 'content', liveEl),
        } : null,
        commentText: text('#comments #count yt-formatted-string'),
    };
}
"""


class YouTubeAdapter(SiteAdapter):
    name = "youtube"
    domains = ["youtube.com"]
    base_url = "https://www.youtube.com"
    short_form_path = "/shorts/"
    title_suffix = " - YouTube"

    RESULT_ITEM = "ytd-video-renderer"
    FILTER_BUTTON = "#filter-button"
    SORT_BY_DATE = 'div[title="Sort by upload date"]'
    EXPAND_BUTTON = "#bottom-row tp-yt-paper-button#expand"

    FIRST_BATCH_TIMEOUT_MS = 10000
    CONTROL_TIMEOUT_MS = 2000

    def search_url(self, term: str) -> str:
        return f"{self.base_url}/results?search_query={quote(term, safe='')}"

    async def navigate_search(self, page, term: str, delays) -> None:
        await page.goto(self.search_url(term), wait_until="networkidle")
        await page.wait_for_selector(self.RESULT_ITEM, timeout=self.FIRST_BATCH_TIMEOUT_MS)

    async def apply_recent_sort(self, page, delays) -> None:
        await page.wait_for_selector(self.FILTER_BUTTON, timeout=self.CONTROL_TIMEOUT_MS)
        await page.click(self.FILTER_BUTTON)
        await page.wait_for_timeout(delays.partial_page_load)

        await page.wait_for_selector(self.SORT_BY_DATE, timeout=self.CONTROL_TIMEOUT_MS)
        await page.click(self.SORT_BY_DATE)
        await page.wait_for_timeout(delays.page_load)

    async def extract_visible(self, page) -> List[Dict[str, Any]]:
        return await page.evaluate(_LISTING_SCRIPT, self.RESULT_ITEM) or []

    async def open_detail(self, page, url: str, delays) -> None:
        await page.goto(url, wait_until="domcontentloaded")
        await page.wait_for_timeout(delays.partial_page_load)

        await page.evaluate("(f) => window.scrollBy(0, window.innerHeight * f)", 0.3)
        await page.wait_for_timeout(delays.scroll)

        # The description is truncated until the expander is clicked
        expand = await page.query_selector(self.EXPAND_BUTTON)
        if expand:
            await expand.click()
            await page.wait_for_timeout(delays.click)
        else:
            logger.warning("No description expander on %s", url)

    async def read_detail(self, page) -> Dict[str, Any]:
        return await page.evaluate(_DETAIL_SCRIPT) or {}
