import logging
from datetime import datetime
from typing import Dict, List, Optional

from playwright._impl._errors import TargetClosedError

from tubescraper.adapters.base import CandidateResult, SiteAdapter
from tubescraper.config import CollectionConfig, Delays
from tubescraper.utils.identity import canonicalize
from tubescraper.utils.relative_time import is_after_cutoff

logger = logging.getLogger(__name__)


async def streaming_scroll_and_collect(
    page,
    adapter: SiteAdapter,
    config: CollectionConfig,
    *,
    term: str = "",
    delays: Optional[Delays] = None,
    max_rounds: int = 200,
    stagnant_tolerance: int = 8,
    step_ratio: float = 0.9,
    now: Optional[datetime] = None,
) -> List[CandidateResult]:
    """Scroll the listing and gather unique candidates in discovery order.

    Stops when ``config.target_count`` candidates are held, when an item
    older than the cutoff shows up (the listing is sorted newest first, so
    everything after it is older too), when ``stagnant_tolerance`` rounds in
    a row render no new cards, or after ``max_rounds`` rounds.
    """
    delays = delays or Delays()
    working: Dict[str, CandidateResult] = {}   # url -> candidate, insertion ordered
    stagnant_counter = 0
    reached_stale = False

    for round_idx in range(max_rounds):
        try:
            batch = await adapter.extract_visible(page)
        except TargetClosedError:
            logger.warning("[TERMINATE] Listing page closed while collecting '%s'", term)
            break

        logger.debug("--- Round %d | New cards in view: %d ---", round_idx, len(batch))

        unsorted_reported = False
        for raw in batch:
            url = adapter.absolute_url(raw.get("href"))
            if not url:
                continue

            if canonicalize(url, adapter.domains, adapter.short_form_path).is_short_form:
                logger.debug("[SHORT] %s", url)
                continue

            if url in working:
                logger.debug("[DUPE] %s", url)
                continue

            upload_time = raw.get("uploadTimeText")
            after_cutoff = is_after_cutoff(config.cutoff, upload_time, now)

            if reached_stale:
                # Everything past the first stale card should be stale too
                if after_cutoff and not unsorted_reported:
                    logger.warning(
                        "[UNSORTED] '%s' listed a fresh item (%s) after a stale one; "
                        "upload-date sort may not have applied",
                        term,
                        upload_time,
                    )
                    unsorted_reported = True
                continue

            if not after_cutoff:
                logger.info("[STALE] '%s' reached items older than the cutoff (%s)", term, upload_time)
                reached_stale = True
                continue

            working[url] = CandidateResult(
                title=raw.get("title") or "",
                url=url,
                upload_time_text=upload_time,
            )
            logger.debug("[NEW ] %s | Saved Total: %d", url, len(working))

            if len(working) >= config.target_count:
                break

        if len(working) >= config.target_count:
            logger.info("[DONE] Target reached for '%s': %d items", term, len(working))
            break

        if reached_stale:
            break

        if not batch:
            stagnant_counter += 1
            logger.debug("[*] No new cards this round. Stagnant: %d/%d", stagnant_counter, stagnant_tolerance)
            if stagnant_counter >= stagnant_tolerance:
                logger.info("[TERMINATE] Listing for '%s' stopped growing after %d rounds", term, round_idx + 1)
                break
        else:
            stagnant_counter = 0

        if round_idx == max_rounds - 1:
            logger.info("[TERMINATE] Round limit %d hit for '%s' with %d items", max_rounds, term, len(working))
            break

        await page.evaluate("(f) => window.scrollBy(0, window.innerHeight * f)", step_ratio)
        await page.wait_for_timeout(delays.scroll)

    return list(working.values())[: config.target_count]


class ResultCollector:
    """Opens a listing page per term and runs the scroll loop on it."""

    def __init__(self, context, adapter: SiteAdapter, settings):
        self.context = context
        self.adapter = adapter
        self.settings = settings

    async def collect(self, term: str, config: CollectionConfig) -> List[CandidateResult]:
        delays = self.settings.delays
        page = await self.context.new_page()
        try:
            await self.adapter.navigate_search(page, term, delays)
            logger.info("Searching for keyword: %s", term)

            await self.adapter.apply_recent_sort(page, delays)
            logger.info('Applied "Upload date" sort for keyword: %s', term)

            candidates = await streaming_scroll_and_collect(
                page,
                self.adapter,
                config,
                term=term,
                delays=delays,
                max_rounds=self.settings.max_rounds,
                stagnant_tolerance=self.settings.stagnant_tolerance,
            )
            logger.info("Found %d unique videos for keyword '%s'", len(candidates), term)
            return candidates
        finally:
            await page.close()
