import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from jobfeed.log import DebugLog  # noqa: E402
from jobfeed.models import JobListing  # noqa: E402
from jobfeed.sources import SAMPLE_JOBS, sample_listing  # noqa: E402


class JobListingTests(unittest.TestCase):
    def test_selection_payload(self):
        job = JobListing(
            company="Acme", role="Engineer",
            apply_link_url="https://jobright.ai/jobs/info/abc",
            location="Remote", date_posted="2025-01-01",
        )
        self.assertEqual(
            job.to_selection("generate"),
            {
                "company": "Acme",
                "role": "Engineer",
                "location": "Remote",
                "link": "https://jobright.ai/jobs/info/abc",
                "description": "Engineer at Acme (Remote)",
                "datePosted": "2025-01-01",
                "action": "generate",
            },
        )

    def test_description_without_location(self):
        job = JobListing(company="Acme", role="Engineer", apply_link_url="")
        self.assertEqual(job.to_selection()["description"], "Engineer at Acme")
        self.assertEqual(job.to_selection()["action"], "analyze")

    def test_fingerprint_ignores_volatile_id(self):
        a = JobListing(company="Acme", role="Engineer", apply_link_url="u", id="x-1")
        b = JobListing(company=" acme ", role="ENGINEER", apply_link_url="u", id="y-2")
        c = JobListing(company="Acme", role="Analyst", apply_link_url="u")
        self.assertEqual(a.fingerprint, b.fingerprint)
        self.assertNotEqual(a.fingerprint, c.fingerprint)


class SampleTests(unittest.TestCase):
    def test_samples_are_tagged_from_their_key(self):
        job = sample_listing("data-intern")
        self.assertEqual(job.id, "sample-data-intern")
        self.assertEqual((job.job_type, job.role_type), ("Data", "Internship"))
        self.assertEqual(sample_listing("h1b").h1b_status, "🏅")

    def test_every_sample_satisfies_the_listing_invariant(self):
        for key in SAMPLE_JOBS:
            job = sample_listing(key)
            self.assertTrue(job.company or job.role)
            self.assertTrue(job.apply_link_url)


class DebugLogTests(unittest.TestCase):
    def test_lines_are_formatted_and_joined(self):
        debug_log = DebugLog()
        debug_log.add("URL %s failed: %s", "https://a", 404)
        debug_log.add("done")
        self.assertEqual(debug_log.text(), "URL https://a failed: 404\ndone")
        self.assertEqual(len(debug_log), 2)

    def test_bad_format_args_never_raise(self):
        debug_log = DebugLog()
        debug_log.add("%d jobs", "many")
        self.assertEqual(len(debug_log), 1)


if __name__ == "__main__":
    unittest.main()
