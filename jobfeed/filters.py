"""Prefix / exact-match filtering over loaded listings."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Iterable

from jobfeed.models import JobListing

ALL = "All"

TEXT_FIELDS = ("company", "role")
CHOICE_FIELDS = ("level", "location", "h1b_status", "job_type", "role_type")

# Dropdown contents before anything has loaded.
_DEFAULT_OPTIONS: dict[str, list[str]] = {
    "level": ["Senior", "Mid-Level", "Entry-Level/Junior", "Internship"],
    "location": ["REMOTE", "New York, NY", "San Francisco, CA"],
    "h1b_status": ["🏅", "🥈", "🏆"],
    "job_type": ["PM", "Data", "SWE"],
    "role_type": ["New Grad", "Internship"],
}


@dataclass
class FilterSet:
    company: str = ""
    role: str = ""
    level: str = ""
    location: str = ""
    h1b_status: str = ""
    job_type: str = ""
    role_type: str = ""

    @property
    def active(self) -> dict[str, str]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) and getattr(self, f.name) != ALL
        }


def _matches(job: JobListing, filters: FilterSet) -> bool:
    for name in TEXT_FIELDS:
        wanted = getattr(filters, name)
        if wanted and not (getattr(job, name) or "").lower().startswith(wanted.lower()):
            return False
    for name in CHOICE_FIELDS:
        wanted = getattr(filters, name)
        if wanted and wanted != ALL and getattr(job, name) != wanted:
            return False
    return True


def apply_filters(
    records: Iterable[JobListing], filters: FilterSet | None = None
) -> list[JobListing]:
    if filters is None:
        return list(records)
    return [job for job in records if _matches(job, filters)]


def filter_options(records: Iterable[JobListing], field_name: str) -> list[str]:
    """``["All", ...distinct values]`` for one dropdown field."""
    if field_name not in CHOICE_FIELDS:
        raise ValueError(f"{field_name!r} is not a choice field")
    values = [getattr(job, field_name) for job in records]
    if not values:
        return list(_DEFAULT_OPTIONS[field_name])
    distinct = list(dict.fromkeys(v for v in values if v))
    # Badge emojis keep source order; everything else is sorted.
    if field_name != "h1b_status":
        distinct.sort()
    return [ALL, *distinct]
