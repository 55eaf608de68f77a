"""Shared test fixtures for the jobfinder test suite."""

import json
import os
from datetime import datetime, timezone

import httpx
import pytest

from jobfinder.models.job import JobListing
from jobfinder.pipeline.storage import JobStore
from jobfinder.settings import Settings

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")
FIXED_NOW = datetime(2026, 3, 2, 9, 0, 0, tzinfo=timezone.utc)


def load_fixture(filename):
    """Load a fixture file by name."""
    path = os.path.join(FIXTURES_DIR, filename)
    with open(path, encoding="utf-8") as f:
        if filename.endswith(".json"):
            return json.load(f)
        return f.read()


def mock_client_factory(handler):
    """Client factory whose requests are answered by `handler` instead of the network."""
    return lambda: httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def test_settings():
    """Settings without delays, credentials or a .env file."""
    return Settings(
        _env_file=None,
        DB_URL="sqlite://",
        REQUEST_DELAYS={},
        LINKEDIN_RAPIDAPI_KEY=None,
        FORCE_LOCATION=None,
    )


@pytest.fixture
def store():
    """Fresh in-memory store per test."""
    return JobStore("sqlite://")


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def make_listing():
    """Factory fixture for creating JobListing instances with defaults."""

    def _make(**overrides):
        defaults = {
            "job_title": "Data Analyst",
            "company_name": "TestCorp",
            "location": "Kuala Lumpur",
            "job_type": "Full-time",
            "work_arrangement": "Hybrid",
            "salary_min": 4000,
            "salary_max": 6000,
            "salary_currency": "MYR",
            "salary_period": "month",
            "description": "Build dashboards for the sales team.",
            "original_url": "https://example.com/job/1",
            "source_platform": "jobstreet",
            "experience_level": "Mid Level",
            "scraped_at": FIXED_NOW,
        }
        defaults.update(overrides)
        return JobListing(**defaults)

    return _make


class FakeAdapter:
    """Adapter double returning canned listings, or raising `error`."""

    def __init__(self, jobs=(), error=None):
        self.jobs = list(jobs)
        self.error = error
        self.calls = []

    async def fetch(self, keywords, filters):
        self.calls.append((list(keywords), filters))
        if self.error is not None:
            raise self.error
        return list(self.jobs)
