import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from tubescraper.adapters.base import CandidateResult, SiteAdapter, VideoDetailRecord
from tubescraper.adapters.youtube import YouTubeAdapter
from tubescraper.browser import close_browser, open_browser
from tubescraper.config import CollectionConfig, RunSettings
from tubescraper.sink import DatasetSink
from tubescraper.utils.identity import watch_id
from tubescraper.utils.normalize import extract_detail
from tubescraper.utils.stream import ResultCollector

logger = logging.getLogger(__name__)


@dataclass
class TermSummary:
    term: str
    candidates: int = 0
    emitted: int = 0
    failed_items: int = 0
    error: Optional[str] = None


@dataclass
class PipelineSummary:
    terms: List[TermSummary] = field(default_factory=list)

    @property
    def emitted(self) -> int:
        return sum(t.emitted for t in self.terms)

    @property
    def failed_terms(self) -> int:
        return sum(1 for t in self.terms if t.error)


class KeywordPipeline:
    """
    For each search term, in order:
        1. collect candidates from the listing (ResultCollector)
        2. open each candidate's detail page in a fresh page
        3. normalize it and push the record to the sink
        4. close the detail page (always, even on error)

    A failing candidate is logged and skipped; a failing term is logged and
    the next term starts. Records already pushed stay pushed.
    """

    def __init__(
        self,
        context,
        sink: DatasetSink,
        settings: Optional[RunSettings] = None,
        adapter: Optional[SiteAdapter] = None,
        collector: Optional[ResultCollector] = None,
    ):
        self.context = context
        self.sink = sink
        self.settings = settings or RunSettings()
        self.adapter = adapter or YouTubeAdapter()
        self.collector = collector or ResultCollector(context, self.adapter, self.settings)

    async def run(self, terms: Sequence[str], config: CollectionConfig) -> PipelineSummary:
        summary = PipelineSummary()
        for term in terms:
            result = TermSummary(term=term)
            summary.terms.append(result)
            try:
                await self._run_term(term, config, result)
            except Exception as e:
                result.error = f"{type(e).__name__}: {e}"
                logger.exception("Error while processing keyword '%s'", term)
                continue
            logger.info("Finished processing keyword '%s': %d videos", term, result.emitted)
        return summary

    async def _run_term(self, term: str, config: CollectionConfig, result: TermSummary) -> None:
        candidates = await self.collector.collect(term, config)
        result.candidates = len(candidates)

        for candidate in candidates:
            if not watch_id(candidate.url):
                logger.warning("Skipping video with invalid URL: %s", candidate.url)
                continue
            try:
                record = await self.process_candidate(candidate)
            except Exception:
                result.failed_items += 1
                logger.exception("Failed on video '%s' (%s) for keyword '%s'", candidate.title, candidate.url, term)
                continue
            # Only fully normalized records reach the sink
            self.sink.push(record)
            result.emitted += 1

    async def process_candidate(self, candidate: CandidateResult) -> VideoDetailRecord:
        logger.info("Processing video: %s - %s", candidate.title, candidate.url)
        page = await self.context.new_page()
        try:
            await self.adapter.open_detail(page, candidate.url, self.settings.delays)
            raw = await self.adapter.read_detail(page)
            return extract_detail(
                raw,
                fallback_url=candidate.url,
                base_url=self.adapter.base_url,
                title_suffix=self.adapter.title_suffix,
            )
        finally:
            await page.close()


async def crawl_keywords(
    terms: Sequence[str],
    config: CollectionConfig,
    sink: DatasetSink,
    settings: Optional[RunSettings] = None,
) -> PipelineSummary:
    """
    High-level entry point: launch the browser, run every term through the
    pipeline, and close the browser (always, even on error).
    """
    settings = settings or RunSettings()
    pw, browser, context = await open_browser(settings)
    try:
        return await KeywordPipeline(context, sink, settings).run(terms, config)
    finally:
        await close_browser(pw, browser, context)
