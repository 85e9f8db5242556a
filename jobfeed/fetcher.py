"""Fetch raw Markdown from a list of candidate URLs, first success wins.

Candidates are tried strictly one after another and never retried; a
source that cannot be reached on any candidate raises ``SourceUnavailable``
and the caller decides what to show instead.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable

import aiohttp

from jobfeed.config import JobFeedError
from jobfeed.log import DebugLog, get_logger

log = get_logger(__name__)

# A body that will not decode counts as a failed candidate too.
_FETCH_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, OSError, UnicodeDecodeError)


class SourceUnavailable(JobFeedError):
    """Every candidate URL for one logical source failed."""

    def __init__(self, urls: Iterable[str]) -> None:
        self.urls = list(urls)
        super().__init__(f"All {len(self.urls)} candidate URL(s) failed")


@dataclass(frozen=True)
class FetchResult:
    text: str
    url: str
    payload: Any = None


def expand_variants(url: str) -> tuple[str, ...]:
    """Original URL first, then raw-content path and branch-name alternates."""
    urls = [url]
    if "/refs/heads/" in url:
        urls.append(url.replace("/refs/heads/", "/"))
    if "/master/" in url:
        urls.append(url.replace("/master/", "/main/"))
    if "/main/" in url:
        urls.append(url.replace("/main/", "/master/"))
    return tuple(dict.fromkeys(urls))


async def fetch_text(
    session: aiohttp.ClientSession,
    url: str,
    debug_log: DebugLog | None = None,
) -> str | None:
    """GET one URL. ``None`` on transport or decode error, or a non-2xx status."""
    debug_log = debug_log if debug_log is not None else DebugLog()
    try:
        async with session.get(url) as resp:
            if not 200 <= resp.status < 300:
                debug_log.add("URL %s failed: %s", url, resp.status)
                return None
            text = await resp.text()
    except _FETCH_ERRORS as exc:
        debug_log.add("Error with %s: %s", url, str(exc) or exc.__class__.__name__)
        return None
    debug_log.add("Successfully fetched %s", url)
    return text


async def fetch_first_available(
    session: aiohttp.ClientSession,
    urls: Iterable[str],
    debug_log: DebugLog | None = None,
    accept: Callable[[FetchResult], Any] | None = None,
) -> FetchResult:
    """First candidate that fetches (and, with ``accept``, yields a truthy payload).

    ``accept`` sees each fetched body in turn; a falsy return moves on to the
    next candidate and the truthy one is kept as ``FetchResult.payload``.
    """
    debug_log = debug_log if debug_log is not None else DebugLog()
    urls = list(urls)
    for url in urls:
        text = await fetch_text(session, url, debug_log)
        if text is None:
            continue
        result = FetchResult(text=text, url=url)
        if accept is None:
            return result
        payload = accept(result)
        if payload:
            return replace(result, payload=payload)
    log.debug("No usable candidate among: %s", ", ".join(urls))
    raise SourceUnavailable(urls)
