"""Tests for pipeline/storage.py and pipeline/query.py: upsert and the paged read path."""

import math
from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from db.schemas import BookmarkedJobRow, JobListingRow
from jobfinder.errors import QueryValidationError
from jobfinder.models.search import ScrapeLog
from jobfinder.pipeline.query import list_jobs
from conftest import FIXED_NOW


def _seed(store, count):
    """Insert `count` listings; listing i is created i minutes after the first."""
    with store.get_session() as s:
        for i in range(1, count + 1):
            s.add(JobListingRow(
                job_title=f"Job {i}",
                company_name="SeedCorp",
                original_url=f"https://example.com/seed/{i}",
                source_platform="indeed",
                created_at=FIXED_NOW + timedelta(minutes=i),
            ))


# --- Upsert ---


def test_upsert_inserts_new_rows(store, make_listing):
    store.upsert_listings([
        make_listing(original_url="https://example.com/a"),
        make_listing(original_url="https://example.com/b"),
    ])
    assert store.count_listings() == 2


def test_upsert_last_write_wins(store, make_listing):
    url = "https://example.com/job/42"
    store.upsert_listings([make_listing(original_url=url, job_title="Data Analyst", salary_max=6000)])
    store.upsert_listings([make_listing(original_url=url, job_title="Senior Data Analyst", salary_max=None,
                                        source_platform="indeed")])

    assert store.count_listings() == 1
    stored = store.get_listing_by_url(url)
    assert stored.job_title == "Senior Data Analyst"
    assert stored.salary_max is None
    assert stored.source_platform == "indeed"
    assert stored.id is not None


def test_upsert_duplicate_urls_in_one_batch(store, make_listing):
    url = "https://example.com/dup"
    store.upsert_listings([make_listing(original_url=url, job_title="First"),
                           make_listing(original_url=url, job_title="Second")])
    assert store.count_listings() == 1
    assert store.get_listing_by_url(url).job_title == "Second"


def test_get_listing_by_url_missing(store):
    assert store.get_listing_by_url("https://example.com/nope") is None


def test_salary_bounds_are_ordered(make_listing):
    job = make_listing(salary_min=9000, salary_max=5000)
    assert (job.salary_min, job.salary_max) == (5000, 9000)


def test_scrape_log_round_trip(store):
    saved = store.insert_scrape_log(ScrapeLog(
        search_query={"keywords": ["data"], "filters": {}},
        platforms_scraped=["jobstreet"],
        total_results=5,
        status="success",
        execution_time_ms=120,
    ))
    assert saved.id is not None
    logs = store.list_scrape_logs()
    assert len(logs) == 1
    assert logs[0].status == "success"
    assert logs[0].search_query == {"keywords": ["data"], "filters": {}}


def test_bookmark_pair_is_unique(store, make_listing):
    store.upsert_listings([make_listing()])
    listing_id = store.get_listing_by_url("https://example.com/job/1").id

    with store.get_session() as s:
        s.add(BookmarkedJobRow(user_id="user-1", job_listing_id=listing_id))

    with pytest.raises(IntegrityError):
        with store.get_session() as s:
            s.add(BookmarkedJobRow(user_id="user-1", job_listing_id=listing_id, status="applied"))


# --- Query service ---


def test_second_page_newest_first(store, test_settings):
    _seed(store, 25)
    page = list_jobs(store, page=2, limit=10, settings=test_settings)

    # Newest is Job 25, so rows 11-20 are Job 15 down to Job 6
    assert [j.job_title for j in page.data] == [f"Job {i}" for i in range(15, 5, -1)]
    assert page.meta.page == 2
    assert page.meta.limit == 10
    assert page.meta.total == 25
    assert page.meta.total_pages == math.ceil(25 / 10)


def test_last_partial_page(store, test_settings):
    _seed(store, 25)
    page = list_jobs(store, page=3, limit=10, settings=test_settings)
    assert [j.job_title for j in page.data] == [f"Job {i}" for i in range(5, 0, -1)]


def test_empty_store(store, test_settings):
    page = list_jobs(store, settings=test_settings)
    assert page.data == []
    assert page.meta.total == 0
    assert page.meta.total_pages == 0
    assert page.meta.limit == test_settings.LIST_DEFAULT_LIMIT


def test_keyword_matches_title_or_description(store, make_listing, test_settings):
    store.upsert_listings([
        make_listing(original_url="https://example.com/1", job_title="PYTHON Developer", description="Backend"),
        make_listing(original_url="https://example.com/2", job_title="Data Engineer", description="Spark and python"),
        make_listing(original_url="https://example.com/3", job_title="Accountant", description="Ledgers"),
    ])
    page = list_jobs(store, keywords="python", settings=test_settings)
    assert {j.original_url for j in page.data} == {"https://example.com/1", "https://example.com/2"}
    assert page.meta.total == 2


def test_location_and_job_type_filters(store, make_listing, test_settings):
    store.upsert_listings([
        make_listing(original_url="https://example.com/1", location="Petaling Jaya, Selangor", job_type="Full-time"),
        make_listing(original_url="https://example.com/2", location="Penang", job_type="Full-time"),
        make_listing(original_url="https://example.com/3", location="petaling jaya", job_type="Contract"),
    ])
    page = list_jobs(store, location="PETALING", job_type="Full-time", settings=test_settings)
    assert [j.original_url for j in page.data] == ["https://example.com/1"]


def test_limit_is_capped(store, test_settings):
    _seed(store, 5)
    settings = test_settings.model_copy(update={"LIST_MAX_LIMIT": 3})
    page = list_jobs(store, page=1, limit=1000, settings=settings)
    assert len(page.data) == 3
    assert page.meta.limit == 3
    assert page.meta.total_pages == 2


@pytest.mark.parametrize("page, limit", [(0, 10), (-1, 10), (1, 0)])
def test_invalid_paging_rejected(store, test_settings, page, limit):
    with pytest.raises(QueryValidationError):
        list_jobs(store, page=page, limit=limit, settings=test_settings)


def test_wildcards_in_search_are_literal(store, make_listing, test_settings):
    store.upsert_listings([
        make_listing(original_url="https://example.com/1", job_title="100% Remote Designer", location="KL_Sentral"),
        make_listing(original_url="https://example.com/2", job_title="1000 Stores Designer", location="KL Sentral"),
    ])
    by_keyword = list_jobs(store, keywords="100%", settings=test_settings)
    assert [j.original_url for j in by_keyword.data] == ["https://example.com/1"]

    by_location = list_jobs(store, location="kl_sentral", settings=test_settings)
    assert [j.original_url for j in by_location.data] == ["https://example.com/1"]
