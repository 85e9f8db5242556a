"""
Load every source of a category tab concurrently and merge the listings.

Runs: one fetch → parse pipeline per source (concurrent, settle-all) → merge
→ sample data when no source produced anything.
"""
from __future__ import annotations

import asyncio
from typing import Any

import aiohttp

from jobfeed.config import Settings, load_settings
from jobfeed.log import DebugLog, get_logger
from jobfeed.models import FeedResult, JobListing, SourceGroup
from jobfeed.sources import JobFeedBase, SampleSource, get_sources

log = get_logger(__name__)


def _session_kwargs(settings: Settings) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"headers": {"User-Agent": settings.user_agent}}
    if settings.fetch_timeout:
        kwargs["timeout"] = aiohttp.ClientTimeout(total=settings.fetch_timeout)
    return kwargs


async def _gather_sources(
    group: SourceGroup,
    sources: list[JobFeedBase],
    session: aiohttp.ClientSession,
    debug_log: DebugLog,
) -> FeedResult:
    if group.is_grouped:
        debug_log.add("Fetching from all %d repo groups for %s", len(sources), group.name)

    results = await asyncio.gather(
        *(source.load(session, debug_log) for source in sources),
        return_exceptions=True,
    )

    jobs: list[JobListing] = []
    failed: list[str] = []
    for source, result in zip(sources, results):
        if isinstance(result, Exception):
            log.info("[%s] %s FAILED: %s", group.id, source, result)
            debug_log.add("Error with group %s: %s", source, result)
            failed.append(repr(source))
            continue
        if isinstance(result, BaseException):
            raise result
        log.info("[%s] %s returned %d jobs", group.id, source, len(result))
        jobs.extend(result)

    if not jobs:
        log.warning("[%s] Falling back to sample jobs (no source returned listings)", group.id)
        debug_log.add("No jobs found in any repo. Using fallback data.")
        return FeedResult(
            jobs=await SampleSource(group).load(session, debug_log),
            debug_log=debug_log.text(),
            used_samples=True,
            failed_sources=failed,
        )

    return FeedResult(jobs=jobs, debug_log=debug_log.text(), failed_sources=failed)


async def load_category(
    group: SourceGroup,
    *,
    session: aiohttp.ClientSession | None = None,
    settings: Settings | None = None,
) -> FeedResult:
    """Merged listings for ``group``; never empty (samples on total failure)."""
    settings = settings or load_settings()
    debug_log = DebugLog()
    sources = get_sources(group, link_host=settings.link_host)

    if session is not None:
        return await _gather_sources(group, sources, session, debug_log)
    async with aiohttp.ClientSession(**_session_kwargs(settings)) as own_session:
        return await _gather_sources(group, sources, own_session, debug_log)


def load_category_sync(group: SourceGroup, settings: Settings | None = None) -> FeedResult:
    return asyncio.run(load_category(group, settings=settings))
