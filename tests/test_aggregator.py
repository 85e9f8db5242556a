import sys
import unittest
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
for path in (PROJECT_ROOT, PROJECT_ROOT / "tests"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from fakes import FakeSession  # noqa: E402
from jobfeed.aggregator import load_category  # noqa: E402
from jobfeed.config import DEFAULT_LINK_HOST, Settings  # noqa: E402
from jobfeed.fetcher import expand_variants  # noqa: E402
from jobfeed.models import SourceEntry, SourceGroup  # noqa: E402
from jobfeed.sources import SampleSource  # noqa: E402

RAW = "https://raw.githubusercontent.com/jobright-ai"
SWE_NEW_GRAD = f"{RAW}/2025-Software-Engineer-New-Grad/refs/heads/master/README.md"
PM_INTERN = f"{RAW}/2025-Product-Management-Internship/refs/heads/master/README.md"
H1B = f"{RAW}/Daily-H1B-Jobs-In-Tech/refs/heads/master/README.md"

SETTINGS = Settings(
    sources_path=Path("/nonexistent/sources.yaml"),
    fetch_timeout=None,
    user_agent="jobfeed-tests",
    link_host=DEFAULT_LINK_HOST,
)

GENERIC_TABLE = (
    "# 2025 Software Engineer New Grad\n"
    "| Company | Job Title | Location | Work Model | Date Posted |\n"
    "| ----- | --------- | --------- | ---- | ------- |\n"
    "| **[Stripe](https://stripe.com)** | **[Software Engineer](https://jobright.ai/jobs/info/s1)** | Seattle, WA | On Site | Jan 05 |\n"
    "| ↳ | **[Backend Engineer](https://jobright.ai/jobs/info/s2)** | Remote | Remote | Jan 05 |\n"
)

H1B_TABLE = (
    "| Company | Job Title | Level | Location | H1B | Link | Date |\n"
    "| --- | --- | --- | --- | --- | --- | --- |\n"
    "| **[Acme](https://acme.com)** | Engineer | Senior | Remote | 🏅 | [apply](https://jobright.ai/jobs/info/abc) | 2025-01-01 |\n"
)


def _grouped(*urls: str) -> SourceGroup:
    return SourceGroup(
        id="new-grad-intern",
        name="New Grad & Internships",
        sources=tuple(SourceEntry(url=u) for u in urls),
        layout="generic",
        samples=(
            "pm-new-grad", "pm-intern", "data-new-grad",
            "data-intern", "swe-new-grad", "swe-intern",
        ),
    )


H1B_GROUP = SourceGroup(
    id="h1b",
    name="H1B Jobs",
    sources=(SourceEntry(url=H1B),),
    layout="h1b",
    samples=("h1b",),
)


class LoadCategoryTests(unittest.IsolatedAsyncioTestCase):
    async def test_single_source_parses_listings(self):
        session = FakeSession({H1B: (200, H1B_TABLE)})
        result = await load_category(H1B_GROUP, session=session, settings=SETTINGS)

        self.assertFalse(result.used_samples)
        self.assertEqual(len(result), 1)
        self.assertEqual(result.jobs[0].company, "Acme")
        self.assertIn("Successfully parsed 1 jobs", result.debug_log)

    async def test_single_source_failure_falls_back_to_its_sample(self):
        result = await load_category(H1B_GROUP, session=FakeSession(), settings=SETTINGS)

        self.assertTrue(result.used_samples)
        self.assertEqual([j.id for j in result.jobs], ["sample-h1b"])
        self.assertEqual(result.jobs[0].company, "Vanguard")
        self.assertIn("Using fallback data", result.debug_log)

    async def test_failed_source_does_not_drop_successful_one(self):
        session = FakeSession({SWE_NEW_GRAD: (200, GENERIC_TABLE)})
        result = await load_category(
            _grouped(PM_INTERN, SWE_NEW_GRAD), session=session, settings=SETTINGS,
        )

        self.assertFalse(result.used_samples)
        self.assertEqual([j.company for j in result.jobs], ["Stripe", "Stripe"])
        self.assertEqual(len(result.failed_sources), 1)
        for job in result.jobs:
            self.assertEqual(job.job_type, "SWE")
            self.assertEqual(job.role_type, "New Grad")
            self.assertEqual(job.level, "Entry-Level")
        # every PM candidate was tried before giving up
        self.assertTrue(all(url in session.calls for url in (
            PM_INTERN,
            PM_INTERN.replace("/refs/heads/", "/"),
            PM_INTERN.replace("/master/", "/main/"),
        )))

    async def test_every_source_failing_yields_grouped_samples(self):
        result = await load_category(
            _grouped(PM_INTERN, SWE_NEW_GRAD), session=FakeSession(), settings=SETTINGS,
        )

        self.assertTrue(result.used_samples)
        self.assertEqual(len(result.jobs), 6)
        self.assertEqual(
            {(j.job_type, j.role_type) for j in result.jobs},
            {
                (job, role)
                for job in ("PM", "Data", "SWE")
                for role in ("New Grad", "Internship")
            },
        )

    async def test_unparseable_candidate_moves_on_to_next_variant(self):
        session = FakeSession({
            SWE_NEW_GRAD: (200, "# Moved\n\nThis list now lives elsewhere."),
            SWE_NEW_GRAD.replace("/refs/heads/", "/"): (200, GENERIC_TABLE),
        })
        result = await load_category(_grouped(SWE_NEW_GRAD), session=session, settings=SETTINGS)

        self.assertFalse(result.used_samples)
        self.assertEqual(len(result.jobs), 2)
        self.assertIn("Trying next URL", result.debug_log)

    async def test_every_variant_unparseable_falls_back_to_samples(self):
        variants = expand_variants(H1B)
        session = FakeSession({url: (200, "# Moved\n\nprose") for url in variants})

        with self.assertLogs("jobfeed.aggregator", level="WARNING") as captured:
            result = await load_category(H1B_GROUP, session=session, settings=SETTINGS)

        self.assertTrue(result.used_samples)
        self.assertEqual([j.id for j in result.jobs], ["sample-h1b"])
        self.assertEqual(session.calls, list(variants))
        self.assertEqual(result.debug_log.count("Trying next URL"), len(variants))
        self.assertEqual(len(variants), 3)
        # only the whole-category fallback is a warning
        self.assertEqual(len(captured.records), 1)
        self.assertIn("Falling back to sample jobs", captured.output[0])

    async def test_fallback_is_served_through_sample_source_load(self):
        with patch.object(
            SampleSource, "load", autospec=True, side_effect=SampleSource.load
        ) as load:
            result = await load_category(H1B_GROUP, session=FakeSession(), settings=SETTINGS)

        load.assert_awaited_once()
        self.assertEqual([j.id for j in result.jobs], ["sample-h1b"])

    async def test_headerless_source_uses_alternate_strategy(self):
        headerless = (
            "| **[Acme](https://acme.com)** | Engineer | Remote | [apply](https://jobright.ai/jobs/info/x1) | Jan 01 |\n"
        )
        session = FakeSession({PM_INTERN: (200, headerless)})
        result = await load_category(_grouped(PM_INTERN), session=session, settings=SETTINGS)

        self.assertEqual(len(result.jobs), 1)
        self.assertEqual(result.jobs[0].job_type, "PM")
        self.assertEqual(result.jobs[0].level, "Internship")
        self.assertIn("Alternate parsing found 1 jobs", result.debug_log)


if __name__ == "__main__":
    unittest.main()
