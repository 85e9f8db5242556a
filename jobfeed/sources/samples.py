"""Fixed sample listings shown when every source of a tab failed."""
from __future__ import annotations

import aiohttp

from jobfeed.log import DebugLog, get_logger
from jobfeed.models import OTHER, JobListing, SourceGroup
from jobfeed.sources.base import JobFeedBase

log = get_logger(__name__)

_JOB_TYPES = {"pm": "PM", "data": "Data", "swe": "SWE"}
_ROLE_TYPES = {"new-grad": "New Grad", "intern": "Internship"}

SAMPLE_JOBS: dict[str, dict[str, str]] = {
    "h1b": {
        "company": "Vanguard", "role": "Senior Fraud Data Scientist", "level": "Senior",
        "location": "Malvern, PA", "h1b_status": "🏅",
        "url": "https://jobright.ai/jobs/info/example123", "date": "2025-05-20",
    },
    "pm-new-grad": {
        "company": "T-Mobile", "role": "Associate Product Manager", "level": "Entry-Level",
        "location": "Bellevue, WA",
        "url": "https://jobright.ai/jobs/info/example456", "date": "2025-05-19",
    },
    "pm-intern": {
        "company": "Meta", "role": "Product Management Intern", "level": "Internship",
        "location": "Menlo Park, CA",
        "url": "https://jobright.ai/jobs/info/example789", "date": "2025-05-18",
    },
    "pm-exp": {
        "company": "Amazon", "role": "Senior Product Manager", "level": "Senior",
        "location": "Seattle, WA",
        "url": "https://jobright.ai/jobs/info/example101", "date": "2025-05-17",
    },
    "data-new-grad": {
        "company": "Google", "role": "Data Analyst", "level": "Entry-Level",
        "location": "Mountain View, CA",
        "url": "https://jobright.ai/jobs/info/example102", "date": "2025-05-16",
    },
    "data-intern": {
        "company": "Microsoft", "role": "Data Science Intern", "level": "Internship",
        "location": "Redmond, WA",
        "url": "https://jobright.ai/jobs/info/example103", "date": "2025-05-15",
    },
    "data-exp": {
        "company": "IBM", "role": "Principal Data Scientist", "level": "Senior",
        "location": "New York, NY",
        "url": "https://jobright.ai/jobs/info/example104", "date": "2025-05-14",
    },
    "swe-new-grad": {
        "company": "Microsoft", "role": "Software Engineer", "level": "Entry-Level",
        "location": "Redmond, WA",
        "url": "https://jobright.ai/jobs/info/example105", "date": "2025-05-13",
    },
    "swe-intern": {
        "company": "Apple", "role": "Software Engineering Intern", "level": "Internship",
        "location": "Cupertino, CA",
        "url": "https://jobright.ai/jobs/info/example106", "date": "2025-05-12",
    },
    "swe-exp": {
        "company": "Netflix", "role": "Senior Software Engineer", "level": "Senior",
        "location": "Los Gatos, CA",
        "url": "https://jobright.ai/jobs/info/example107", "date": "2025-05-11",
    },
}


def _category_for(key: str) -> tuple[str, str]:
    """``swe-new-grad`` → (SWE, New Grad); unknown parts map to Other."""
    prefix, _, stage = key.partition("-")
    return _JOB_TYPES.get(prefix, OTHER), _ROLE_TYPES.get(stage, OTHER)


def sample_listing(key: str) -> JobListing:
    data = SAMPLE_JOBS[key]
    job_type, role_type = _category_for(key)
    return JobListing(
        company=data["company"],
        role=data["role"],
        apply_link_url=data["url"],
        apply_link_text="apply",
        level=data["level"],
        location=data["location"],
        h1b_status=data.get("h1b_status", ""),
        date_posted=data["date"],
        job_type=job_type,
        role_type=role_type,
        id=f"sample-{key}",
    )


class SampleSource(JobFeedBase):
    def __init__(self, group: SourceGroup) -> None:
        self.group = group

    @property
    def keys(self) -> tuple[str, ...]:
        keys = tuple(k for k in self.group.samples if k in SAMPLE_JOBS)
        if not keys:
            keys = (self.group.id,) if self.group.id in SAMPLE_JOBS else ("swe-new-grad",)
        return keys

    async def load(
        self, session: aiohttp.ClientSession | None = None, debug_log: DebugLog | None = None
    ) -> list[JobListing]:
        return self.listings()

    def listings(self) -> list[JobListing]:
        log.info("SampleSource returning %d sample job(s) for %r", len(self.keys), self.group.id)
        return [sample_listing(key) for key in self.keys]
