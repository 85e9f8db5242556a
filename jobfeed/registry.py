"""Built-in category tabs and lookup helpers.

A ``config/sources.yaml`` with the same shape replaces these tabs entirely
(see ``config/sources.example.yaml``).
"""
from __future__ import annotations

from pathlib import Path

from jobfeed.config import load_registry
from jobfeed.models import SourceGroup

_RAW = "https://raw.githubusercontent.com/jobright-ai"

DEFAULT_TABS: dict = {
    "tabs": [
        {
            "id": "h1b",
            "name": "H1B Jobs",
            "layout": "h1b",
            "samples": ["h1b"],
            "sources": [
                f"{_RAW}/Daily-H1B-Jobs-In-Tech/refs/heads/master/README.md",
            ],
        },
        {
            "id": "new-grad-intern",
            "name": "New Grad & Internships",
            "layout": "generic",
            "samples": [
                "pm-new-grad", "pm-intern",
                "data-new-grad", "data-intern",
                "swe-new-grad", "swe-intern",
            ],
            "sources": [
                f"{_RAW}/2025-Product-Management-New-Grad/refs/heads/master/README.md",
                f"{_RAW}/2025-Product-Management-Internship/refs/heads/master/README.md",
                f"{_RAW}/2025-Data-Analysis-New-Grad/refs/heads/master/README.md",
                f"{_RAW}/2025-Data-Analysis-Internship/refs/heads/master/README.md",
                f"{_RAW}/2025-Software-Engineer-New-Grad/refs/heads/master/README.md",
                f"{_RAW}/2025-Software-Engineering-Internship/refs/heads/master/README.md",
            ],
        },
    ]
}


def get_tab(tab_id: str, path: Path | None = None) -> SourceGroup:
    tabs = load_registry(path)
    try:
        return tabs[tab_id]
    except KeyError:
        raise KeyError(f"Unknown tab {tab_id!r}; available: {', '.join(tabs)}") from None


def list_tabs(path: Path | None = None) -> list[SourceGroup]:
    return list(load_registry(path).values())
