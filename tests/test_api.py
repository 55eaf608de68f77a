"""Tests for api/app.py: the /scrape-jobs and /get-jobs endpoints."""

import pytest
from fastapi.testclient import TestClient

from db.schemas import JobListingRow
from jobfinder.api.app import create_app
from jobfinder.pipeline.orchestrator import Aggregator
from conftest import FIXED_NOW, FakeAdapter


class ExplodingAggregator:
    async def run(self, keywords, platforms, filters=None, user_id=None):
        raise RuntimeError("connection pool exhausted")


@pytest.fixture
def adapters(make_listing):
    return {
        "jobstreet": FakeAdapter([
            make_listing(original_url="https://example.com/js/1", source_platform="jobstreet"),
            make_listing(original_url="https://example.com/js/2", source_platform="jobstreet"),
        ]),
        "indeed": FakeAdapter(error=RuntimeError("blocked")),
    }


@pytest.fixture
def client(store, test_settings, adapters):
    aggregator = Aggregator(store, test_settings, adapters)
    return TestClient(create_app(test_settings, store=store, aggregator=aggregator))


# --- POST /scrape-jobs ---


def test_scrape_success(client, store):
    resp = client.post("/scrape-jobs", json={"keywords": ["data"], "platforms": ["jobstreet"]})

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["jobCount"] == 2
    assert body["errors"] is None
    assert body["status"] == "success"
    assert isinstance(body["executionTime"], int)
    assert body["jobs"][0]["original_url"] == "https://example.com/js/1"
    assert body["jobs"][0]["source_platform"] == "jobstreet"
    assert store.count_listings() == 2


def test_scrape_partial_lists_errors(client):
    resp = client.post("/scrape-jobs", json={"keywords": ["data"], "platforms": ["jobstreet", "indeed"]})

    assert resp.status_code == 200
    body = resp.json()
    assert body["jobCount"] == 2
    assert body["errors"] == ["indeed: blocked"]
    assert body["status"] == "partial"


def test_scrape_passes_filters_and_user(client, store, adapters):
    payload = {
        "keywords": ["data"],
        "platforms": ["jobstreet"],
        "filters": {"jobType": ["Internship"], "location": "Penang", "salaryMin": 1500},
        "userId": "user-42",
    }
    assert client.post("/scrape-jobs", json=payload).status_code == 200

    (_, filters), = adapters["jobstreet"].calls
    assert filters.job_type == ["Internship"]
    assert filters.location == "Penang"
    assert filters.salary_min == 1500
    assert store.list_scrape_logs()[0].user_id == "user-42"


@pytest.mark.parametrize("payload, message", [
    ({"keywords": [], "platforms": ["jobstreet"]}, "Keywords are required"),
    ({"platforms": ["jobstreet"]}, "Keywords are required"),
    ({"keywords": ["data"], "platforms": []}, "At least one platform is required"),
])
def test_scrape_rejects_missing_fields(client, store, payload, message):
    resp = client.post("/scrape-jobs", json=payload)

    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": message}
    assert store.list_scrape_logs() == []


def test_scrape_rejects_malformed_body(client):
    resp = client.post("/scrape-jobs", content=b"{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["success"] is False


def test_scrape_unexpected_error_is_500(store, test_settings):
    app = create_app(test_settings, store=store, aggregator=ExplodingAggregator())
    resp = TestClient(app).post("/scrape-jobs", json={"keywords": ["data"], "platforms": ["jobstreet"]})

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Internal server error"}


def test_cors_preflight(client):
    resp = client.options("/scrape-jobs", headers={
        "Origin": "http://localhost:5173",
        "Access-Control-Request-Method": "POST",
        "Access-Control-Request-Headers": "content-type, apikey",
    })
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"
    assert "POST" in resp.headers["access-control-allow-methods"]


def test_cors_header_on_response(client):
    resp = client.get("/get-jobs", headers={"Origin": "http://localhost:5173"})
    assert resp.headers["access-control-allow-origin"] == "*"


# --- GET /get-jobs ---


def _seed(store, count):
    with store.get_session() as s:
        for i in range(1, count + 1):
            s.add(JobListingRow(
                job_title=f"Job {i}",
                company_name="SeedCorp",
                original_url=f"https://example.com/seed/{i}",
                source_platform="hiredly",
                job_type="Internship" if i % 2 else "Full-time",
                created_at=FIXED_NOW.replace(minute=i),
            ))


def test_get_jobs_paging(client, store):
    _seed(store, 25)
    resp = client.get("/get-jobs", params={"page": "2", "limit": "10"})

    assert resp.status_code == 200
    body = resp.json()
    assert [j["job_title"] for j in body["data"]] == [f"Job {i}" for i in range(15, 5, -1)]
    assert body["meta"] == {"page": 2, "limit": 10, "total": 25, "totalPages": 3}


def test_get_jobs_defaults(client, store):
    _seed(store, 3)
    body = client.get("/get-jobs").json()
    assert body["meta"] == {"page": 1, "limit": 20, "total": 3, "totalPages": 1}


def test_get_jobs_filters(client, store):
    _seed(store, 6)
    body = client.get("/get-jobs", params={"job_type": "Internship", "keywords": "job"}).json()
    assert [j["job_title"] for j in body["data"]] == ["Job 5", "Job 3", "Job 1"]
    assert body["meta"]["total"] == 3


def test_get_jobs_limit_capped(client, store):
    body = client.get("/get-jobs", params={"limit": "5000"}).json()
    assert body["meta"]["limit"] == 100


@pytest.mark.parametrize("params", [
    {"page": "abc"},
    {"page": "0"},
    {"limit": "-5"},
    {"limit": "ten"},
])
def test_get_jobs_bad_paging(client, params):
    resp = client.get("/get-jobs", params=params)
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_scrape_rejects_unknown_job_type(client, store):
    payload = {"keywords": ["data"], "platforms": ["jobstreet"], "filters": {"jobType": ["Volunteer"]}}
    resp = client.post("/scrape-jobs", json=payload)

    assert resp.status_code == 400
    assert resp.json()["success"] is False
    assert "Unknown job type: Volunteer" in resp.json()["error"]
    assert store.list_scrape_logs() == []


def test_scrape_normalises_job_type(client, adapters):
    payload = {"keywords": ["data"], "platforms": ["jobstreet"], "filters": {"jobType": ["full time", "INTERN"]}}
    assert client.post("/scrape-jobs", json=payload).status_code == 200

    (_, filters), = adapters["jobstreet"].calls
    assert filters.job_type == ["Full-time", "Internship"]
