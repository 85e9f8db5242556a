from .base import JobFeedBase
from .markdown import MarkdownTableSource
from .samples import SAMPLE_JOBS, SampleSource, sample_listing

from jobfeed.config import DEFAULT_LINK_HOST
from jobfeed.log import get_logger
from jobfeed.models import SourceGroup

log = get_logger(__name__)

__all__ = [
    "JobFeedBase", "MarkdownTableSource", "SampleSource",
    "SAMPLE_JOBS", "sample_listing", "get_sources",
]


def get_sources(group: SourceGroup, link_host: str = DEFAULT_LINK_HOST) -> list[JobFeedBase]:
    sources: list[JobFeedBase] = []
    for entry in group.sources:
        sources.append(MarkdownTableSource(entry, layout=group.layout, link_host=link_host))
        log.debug("Registered source for %r: %s", group.id, entry.url)
    return sources
