#!/usr/bin/env python3
"""
Load one job tab and print the (optionally filtered) listings.

Usage:
    python run_feed.py                          # H1B tab
    python run_feed.py --tab new-grad-intern --job-type SWE --role-type "New Grad"
    python run_feed.py --company goo --json     # prefix match on company
    python run_feed.py --debug                  # also dump the fetch/parse trace
"""
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from jobfeed.aggregator import load_category_sync
from jobfeed.config import RegistryError
from jobfeed.filters import FilterSet, apply_filters
from jobfeed.log import get_logger
from jobfeed.registry import get_tab, list_tabs

log = get_logger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Daily job tables, normalized.")
    parser.add_argument("--tab", default="h1b", help="Tab id from the source registry")
    parser.add_argument("--list-tabs", action="store_true", help="Show tab ids and exit")
    parser.add_argument("--company", default="", help="Company name prefix")
    parser.add_argument("--role", default="", help="Job title prefix")
    parser.add_argument("--level", default="")
    parser.add_argument("--location", default="")
    parser.add_argument("--h1b", dest="h1b_status", default="")
    parser.add_argument("--job-type", default="", help="SWE, PM, Data or Other")
    parser.add_argument("--role-type", default="", help="New Grad, Internship or Other")
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of lines")
    parser.add_argument("--debug", action="store_true", help="Print the debug trace")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        if args.list_tabs:
            for group in list_tabs():
                print(f"{group.id:20} {group.name} ({len(group.sources)} source(s))")
            return 0
        group = get_tab(args.tab)
    except (KeyError, RegistryError) as exc:
        log.error("%s", exc)
        return 2

    result = load_category_sync(group)
    filters = FilterSet(
        company=args.company,
        role=args.role,
        level=args.level,
        location=args.location,
        h1b_status=args.h1b_status,
        job_type=args.job_type,
        role_type=args.role_type,
    )
    jobs = apply_filters(result.jobs, filters)

    if args.json:
        print(json.dumps([asdict(job) for job in jobs], indent=2, ensure_ascii=False))
    else:
        for job in jobs:
            print(
                f"{job.company} | {job.role} | {job.level} | {job.location} | "
                f"{job.h1b_status} | {job.date_posted} | {job.apply_link_url}"
            )

    log.info("%s: %d of %d jobs shown", group.name, len(jobs), len(result.jobs))
    if result.used_samples:
        log.warning("Showing sample data; run with --debug for details")
    if args.debug:
        print(result.debug_log or "No debug information available")
    return 0


if __name__ == "__main__":
    sys.exit(main())
