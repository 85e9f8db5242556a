"""Data models for job listings and the source groups they come from."""
from __future__ import annotations

import hashlib
from dataclasses import dataclass, field

OTHER = "Other"
LAYOUT_H1B = "h1b"
LAYOUT_GENERIC = "generic"


@dataclass
class JobListing:
    company: str
    role: str
    apply_link_url: str
    apply_link_text: str = "Apply"
    level: str = ""
    location: str = ""
    h1b_status: str = ""
    date_posted: str = ""
    job_type: str = OTHER
    role_type: str = OTHER
    # Unique within one parse batch only; regenerated on every fetch.
    id: str = ""

    @property
    def fingerprint(self) -> str:
        """Stable identity across fetches: hash of company, role and apply URL."""
        normalized = "|".join(
            part.lower().strip()
            for part in (self.company, self.role, self.apply_link_url)
        )
        return hashlib.sha256(normalized.encode()).hexdigest()[:16]

    def to_selection(self, action: str = "analyze") -> dict[str, str]:
        """Payload handed to the fit-analysis / document-generation collaborators."""
        description = f"{self.role} at {self.company}"
        if self.location:
            description += f" ({self.location})"
        return {
            "company": self.company,
            "role": self.role,
            "location": self.location,
            "link": self.apply_link_url,
            "description": description,
            "datePosted": self.date_posted,
            "action": action,
        }


@dataclass(frozen=True)
class SourceEntry:
    """One remote Markdown document believed to hold a job table."""

    url: str
    job_type: str | None = None
    role_type: str | None = None


@dataclass(frozen=True)
class SourceGroup:
    """A category tab mapped to one or more sources."""

    id: str
    name: str
    sources: tuple[SourceEntry, ...]
    layout: str | None = None
    samples: tuple[str, ...] = ()

    @property
    def is_grouped(self) -> bool:
        return len(self.sources) > 1


@dataclass
class FeedResult:
    jobs: list[JobListing]
    debug_log: str = ""
    used_samples: bool = False
    failed_sources: list[str] = field(default_factory=list)

    def __iter__(self):
        return iter(self.jobs)

    def __len__(self) -> int:
        return len(self.jobs)
