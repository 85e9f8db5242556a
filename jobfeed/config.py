"""Load env settings and the YAML source registry."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from jobfeed.log import get_logger
from jobfeed.models import LAYOUT_GENERIC, LAYOUT_H1B, SourceEntry, SourceGroup

log = get_logger(__name__)

load_dotenv()

CONFIG_DIR: Path = Path(__file__).resolve().parent.parent / "config"
SOURCES_PATH: Path = CONFIG_DIR / "sources.yaml"
DEFAULT_LINK_HOST = "jobright.ai/jobs/info"
DEFAULT_USER_AGENT = "jobfeed/0.1 (+markdown job tables)"


class JobFeedError(Exception):
    """Base class for errors raised by jobfeed."""


class RegistryError(JobFeedError):
    """The source registry file is malformed."""


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _get_env_float(key: str) -> float | None:
    raw = get_env(key)
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        log.warning("Ignoring non-numeric %s=%r", key, raw)
        return None
    return value if value > 0 else None


@dataclass(frozen=True)
class Settings:
    sources_path: Path
    fetch_timeout: float | None
    user_agent: str
    link_host: str


def load_settings() -> Settings:
    return Settings(
        sources_path=Path(get_env("JOBFEED_SOURCES_PATH") or SOURCES_PATH),
        # None leaves the transport default in place.
        fetch_timeout=_get_env_float("JOBFEED_FETCH_TIMEOUT"),
        user_agent=get_env("JOBFEED_USER_AGENT", DEFAULT_USER_AGENT) or DEFAULT_USER_AGENT,
        link_host=get_env("JOBFEED_LINK_HOST", DEFAULT_LINK_HOST) or DEFAULT_LINK_HOST,
    )


def _parse_source(entry: Any, tab_id: str) -> SourceEntry:
    if isinstance(entry, str):
        return SourceEntry(url=entry.strip())
    if isinstance(entry, dict) and entry.get("url"):
        return SourceEntry(
            url=str(entry["url"]).strip(),
            job_type=entry.get("job_type"),
            role_type=entry.get("role_type"),
        )
    raise RegistryError(f"Tab {tab_id!r}: source entry needs a url, got {entry!r}")


def parse_registry(data: Any) -> dict[str, SourceGroup]:
    """Build ``{tab_id: SourceGroup}`` from the decoded YAML document."""
    if not isinstance(data, dict) or not isinstance(data.get("tabs"), list):
        raise RegistryError("Registry must be a mapping with a 'tabs' list")

    groups: dict[str, SourceGroup] = {}
    for tab in data["tabs"]:
        if not isinstance(tab, dict) or not tab.get("id"):
            raise RegistryError(f"Tab entry needs an id, got {tab!r}")
        tab_id = str(tab["id"])
        raw_sources = tab.get("sources") or []
        if not raw_sources:
            raise RegistryError(f"Tab {tab_id!r} has no sources")
        layout = tab.get("layout")
        if layout not in (None, LAYOUT_H1B, LAYOUT_GENERIC):
            raise RegistryError(f"Tab {tab_id!r}: unknown layout {layout!r}")
        groups[tab_id] = SourceGroup(
            id=tab_id,
            name=str(tab.get("name") or tab_id),
            sources=tuple(_parse_source(s, tab_id) for s in raw_sources),
            layout=layout,
            samples=tuple(tab.get("samples") or ()),
        )
    return groups


def load_registry(path: Path | None = None) -> dict[str, SourceGroup]:
    """YAML registry when present, otherwise the built-in tabs."""
    from jobfeed.registry import DEFAULT_TABS

    path = path or load_settings().sources_path
    if not path.exists():
        return parse_registry(DEFAULT_TABS)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise RegistryError(f"Cannot parse {path}: {exc}") from exc
    groups = parse_registry(data)
    log.info("Loaded %d tab(s) from %s", len(groups), path)
    return groups
