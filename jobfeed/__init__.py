"""Daily job-table ingestion: fetch, parse, merge and filter."""
