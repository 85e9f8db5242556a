"""One remote Markdown job table: URL variants → fetch → parse."""
from __future__ import annotations

import aiohttp

from jobfeed.config import DEFAULT_LINK_HOST
from jobfeed.fetcher import (
    FetchResult,
    SourceUnavailable,
    expand_variants,
    fetch_first_available,
)
from jobfeed.log import DebugLog, get_logger
from jobfeed.models import JobListing, SourceEntry
from jobfeed.parser import parse_table, resolve_category
from jobfeed.sources.base import JobFeedBase

log = get_logger(__name__)


class MarkdownTableSource(JobFeedBase):
    def __init__(
        self,
        entry: SourceEntry,
        layout: str | None = None,
        link_host: str = DEFAULT_LINK_HOST,
    ) -> None:
        self.entry = entry
        self.layout = layout
        self.link_host = link_host

    @property
    def candidates(self) -> tuple[str, ...]:
        return expand_variants(self.entry.url)

    async def load(
        self, session: aiohttp.ClientSession, debug_log: DebugLog
    ) -> list[JobListing]:
        """Listings from the first candidate that fetches and parses.

        Raises ``SourceUnavailable`` once every candidate is exhausted.
        """

        def parse(fetched: FetchResult) -> list[JobListing]:
            job_type, role_type = resolve_category(
                fetched.text, url=fetched.url,
                job_type=self.entry.job_type, role_type=self.entry.role_type,
            )
            outcome = parse_table(
                fetched.text, job_type, role_type,
                layout=self.layout, link_host=self.link_host,
            )
            if outcome.strategy == "primary":
                debug_log.add("Successfully parsed %d jobs from %s", len(outcome.jobs), fetched.url)
            elif outcome.strategy == "alternate":
                debug_log.add("Alternate parsing found %d jobs from %s", len(outcome.jobs), fetched.url)
            else:
                log.debug("No table rows recognised in %s (%d bytes)", fetched.url, len(fetched.text))
                debug_log.add(
                    "No jobs found in %s with either table pattern. Trying next URL", fetched.url
                )
            return outcome.jobs

        try:
            result = await fetch_first_available(
                session, self.candidates, debug_log, accept=parse
            )
        except SourceUnavailable:
            debug_log.add("All URLs for %s failed.", self.entry.url)
            raise
        return result.payload

    def __repr__(self) -> str:
        return f"MarkdownTableSource({self.entry.url!r})"
