"""Turn semi-structured Markdown job tables into ``JobListing`` records.

Two strategies, tried in order by ``parse_table``:

* primary: anchor on a recognised header row, skip the separator, then walk
  the rows top to bottom. Continuation rows (company cell is a ditto arrow)
  inherit the company of the last full row.
* alternate: no header needed; any piped line mentioning the job-board link
  host is parsed on its own.

Neither raises on malformed input; no match is an empty list.
"""
from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from typing import Callable

from jobfeed.config import DEFAULT_LINK_HOST
from jobfeed.models import LAYOUT_GENERIC, LAYOUT_H1B, OTHER, JobListing

JOB_TYPE_SWE = "SWE"
JOB_TYPE_PM = "PM"
JOB_TYPE_DATA = "Data"
ROLE_TYPE_NEW_GRAD = "New Grad"
ROLE_TYPE_INTERNSHIP = "Internship"

CONTINUATION_MARKERS = ("↳", "〃")

_LINK_RE = re.compile(r"\[(.*?)\]\((.*?)\)")
_BOLD_LINK_RE = re.compile(r"\*\*\[(.*?)\]")
_BRACKET_RE = re.compile(r"\[(.*?)\]")
_PAREN_URL_RE = re.compile(r"\(https?://[^)]*\)")
_BARE_URL_RE = re.compile(r"https?://\S+")
_SEPARATOR_CELL_RE = re.compile(r"^:?-{3,}:?$")

# (url fragment, value); first match wins.
_URL_JOB_TYPES = (
    ("Software-Engineer", JOB_TYPE_SWE),
    ("Product-Management", JOB_TYPE_PM),
    ("Data-Analysis", JOB_TYPE_DATA),
)
_URL_ROLE_TYPES = (
    ("New-Grad", ROLE_TYPE_NEW_GRAD),
    ("Internship", ROLE_TYPE_INTERNSHIP),
)


def _is_h1b_header(line: str) -> bool:
    return all(
        key in line
        for key in ("Company", "Job Title", "Level", "H1B", "Link", "Date")
    )


_GENERIC_HEADERS: tuple[Callable[[str], bool], ...] = (
    lambda line: "Company" in line and "Job Title" in line and "Location" in line,
    lambda line: "Company" in line and "Location" in line and "Work Model" in line,
    lambda line: "----- | --------- | --------- | ---- | -------" in line,
)


@dataclass
class ParseOutcome:
    """Result of ``parse_table``: the listings and which strategy produced them."""

    jobs: list[JobListing] = field(default_factory=list)
    strategy: str | None = None

    @property
    def matched(self) -> bool:
        return bool(self.jobs)

    def __bool__(self) -> bool:
        return self.matched


# ── Category detection ───────────────────────────────────────────────────


def detect_category(text: str) -> tuple[str, str]:
    """Best-effort (job_type, role_type) from document content."""
    lowered = text.lower()

    job_type = OTHER
    if "product management" in lowered:
        job_type = JOB_TYPE_PM
    elif "data analy" in lowered:
        job_type = JOB_TYPE_DATA
    elif "software engineer" in lowered:
        job_type = JOB_TYPE_SWE

    role_type = OTHER
    if "new grad" in lowered or "2025" in lowered:
        role_type = ROLE_TYPE_NEW_GRAD
    elif "intern" in lowered:
        role_type = ROLE_TYPE_INTERNSHIP

    return job_type, role_type


def infer_category_from_url(url: str) -> tuple[str, str]:
    job_type = next((v for frag, v in _URL_JOB_TYPES if frag in url), OTHER)
    role_type = next((v for frag, v in _URL_ROLE_TYPES if frag in url), OTHER)
    return job_type, role_type


def _known(value: str | None) -> bool:
    return bool(value) and value != OTHER


def resolve_category(
    text: str,
    url: str = "",
    job_type: str | None = None,
    role_type: str | None = None,
) -> tuple[str, str]:
    """Per field: explicit value, then URL path, then content, then ``Other``."""
    if not _known(job_type) or not _known(role_type):
        url_job, url_role = infer_category_from_url(url)
        job_type = job_type if _known(job_type) else url_job
        role_type = role_type if _known(role_type) else url_role
    if not _known(job_type) or not _known(role_type):
        text_job, text_role = detect_category(text)
        job_type = job_type if _known(job_type) else text_job
        role_type = role_type if _known(role_type) else text_role
    return job_type or OTHER, role_type or OTHER


def detect_layout(lines: list[str]) -> str:
    return LAYOUT_H1B if any(_is_h1b_header(line) for line in lines) else LAYOUT_GENERIC


# ── Cell helpers ─────────────────────────────────────────────────────────


def split_cells(line: str) -> list[str]:
    return [cell.strip() for cell in line.split("|") if cell.strip()]


def _cell(cells: list[str], index: int) -> str:
    return cells[index] if index < len(cells) else ""


def _is_separator_row(cells: list[str]) -> bool:
    return all(_SEPARATOR_CELL_RE.match(cell) for cell in cells)


def _is_continuation(cell: str) -> bool:
    return any(marker in cell for marker in CONTINUATION_MARKERS)


def extract_company_name(cell: str) -> str:
    """Strip bold markers, unwrap ``[name](url)`` and drop raw URLs."""
    match = _BOLD_LINK_RE.search(cell) or (
        _BRACKET_RE.search(cell) if "[" in cell and "]" in cell else None
    )
    if match and match.group(1):
        name = match.group(1)
    else:
        name = _PAREN_URL_RE.sub("", cell)
        name = name.replace("[", "").replace("]", "")
        name = _BARE_URL_RE.sub("", name)
    return name.replace("**", "").strip()


def _find_link_cell(cells: list[str], link_host: str) -> str:
    return next((cell for cell in cells if link_host in cell), "")


def _make_id(job_type: str, role_type: str, company: str, role: str, index: int) -> str:
    return f"{job_type}-{role_type}-{company}-{role}-{index}-{uuid.uuid4().hex[:5]}"


def _build_listing(
    cells: list[str],
    company: str,
    *,
    layout: str,
    job_type: str,
    role_type: str,
    link_host: str,
    index: int,
) -> JobListing | None:
    """Map cells to fields for ``layout``; ``None`` if the row is unusable."""
    h1b_status = ""
    if layout == LAYOUT_H1B:
        role = _cell(cells, 1)
        level = _cell(cells, 2)
        location = _cell(cells, 3)
        h1b_status = _cell(cells, 4)
        link = _cell(cells, 5)
        if not _LINK_RE.search(link):
            link = _find_link_cell(cells, link_host) or link
        date = _cell(cells, 6)
    else:
        role = _cell(cells, 1)
        location = _cell(cells, 2)
        if role_type == ROLE_TYPE_INTERNSHIP:
            level = "Internship"
        elif role_type == ROLE_TYPE_NEW_GRAD:
            level = "Entry-Level"
        else:
            level = _cell(cells, 3) or "Experienced"
        link = _find_link_cell(cells, link_host)
        date = _cell(cells, 4) if len(cells) >= 5 else ""

    link_text = link_url = ""
    role_link = _LINK_RE.search(role)
    if role_link and link_host in role_link.group(2):
        # Compact tables put the apply link on the title itself.
        role = role_link.group(1).strip()
        link_url = role_link.group(2).strip()
        link_text = "apply"
    elif link:
        cell_link = _LINK_RE.search(link)
        if cell_link:
            link_text = cell_link.group(1).strip()
            link_url = cell_link.group(2).strip()

    if not (company or role) or not (link_url or link):
        return None

    return JobListing(
        company=company,
        role=role,
        apply_link_url=link_url,
        apply_link_text=link_text or "Apply",
        level=level,
        location=location,
        h1b_status=h1b_status,
        date_posted=date,
        job_type=job_type,
        role_type=role_type,
        id=_make_id(job_type, role_type, company, role, index),
    )


# ── Strategies ───────────────────────────────────────────────────────────


def _hints(text: str, job_type: str | None, role_type: str | None) -> tuple[str, str]:
    if _known(job_type) and _known(role_type):
        return job_type, role_type  # type: ignore[return-value]
    return resolve_category(text, job_type=job_type, role_type=role_type)


def find_header(lines: list[str], layout: str) -> int | None:
    predicates = (_is_h1b_header,) if layout == LAYOUT_H1B else _GENERIC_HEADERS
    for index, line in enumerate(lines):
        if any(predicate(line) for predicate in predicates):
            return index
    return None


def parse_primary(
    text: str,
    job_type: str | None = None,
    role_type: str | None = None,
    layout: str | None = None,
    link_host: str = DEFAULT_LINK_HOST,
) -> list[JobListing]:
    lines = text.splitlines()
    layout = layout or detect_layout(lines)
    job_type, role_type = _hints(text, job_type, role_type)

    header = find_header(lines, layout)
    if header is None:
        return []

    jobs: list[JobListing] = []
    current_company: str | None = None
    for index in range(header + 2, len(lines)):
        line = lines[index].strip()
        if not line or "|" not in line or line.startswith("#") or line.startswith("---"):
            continue
        cells = split_cells(line)
        if len(cells) < 3 or _is_separator_row(cells):
            continue

        if _is_continuation(cells[0]):
            company = current_company or ""
        else:
            company = extract_company_name(cells[0])
            current_company = company

        listing = _build_listing(
            cells, company,
            layout=layout, job_type=job_type, role_type=role_type,
            link_host=link_host, index=index,
        )
        if listing is not None:
            jobs.append(listing)
    return jobs


def parse_alternate(
    text: str,
    job_type: str | None = None,
    role_type: str | None = None,
    layout: str | None = None,
    link_host: str = DEFAULT_LINK_HOST,
) -> list[JobListing]:
    lines = text.splitlines()
    layout = layout or detect_layout(lines)
    job_type, role_type = _hints(text, job_type, role_type)

    jobs: list[JobListing] = []
    for index, line in enumerate(lines):
        if "|" not in line or link_host not in line:
            continue
        cells = split_cells(line)
        if len(cells) < 4:
            continue
        # No chaining here: a ditto row has no company of its own.
        company = "" if _is_continuation(cells[0]) else extract_company_name(cells[0])
        listing = _build_listing(
            cells, company,
            layout=layout, job_type=job_type, role_type=role_type,
            link_host=link_host, index=index,
        )
        if listing is not None:
            jobs.append(listing)
    return jobs


def parse_table(
    text: str,
    job_type: str | None = None,
    role_type: str | None = None,
    layout: str | None = None,
    link_host: str = DEFAULT_LINK_HOST,
) -> ParseOutcome:
    """Primary strategy, then alternate when the primary finds nothing."""
    jobs = parse_primary(text, job_type, role_type, layout, link_host)
    if jobs:
        return ParseOutcome(jobs, "primary")
    jobs = parse_alternate(text, job_type, role_type, layout, link_host)
    if jobs:
        return ParseOutcome(jobs, "alternate")
    return ParseOutcome()
