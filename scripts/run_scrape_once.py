# scripts/run_scrape_once.py
import argparse
import asyncio

from pydantic import ValidationError

from jobfinder.adapters.registry import ADAPTERS
from jobfinder.models.job import SearchFilters
from jobfinder.pipeline.orchestrator import Aggregator
from jobfinder.pipeline.storage import JobStore
from jobfinder.settings import settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Run one aggregation and store the results.")
    parser.add_argument("keywords", nargs="+", help="search keywords")
    parser.add_argument("--platform", "-p", action="append", choices=sorted(ADAPTERS),
                        help="platform to search (repeatable, default: all)")
    parser.add_argument("--job-type", action="append", default=[])
    parser.add_argument("--experience", action="append", default=[])
    parser.add_argument("--location")
    parser.add_argument("--salary-min", type=float)
    args = parser.parse_args()

    try:
        filters = SearchFilters(
            job_type=args.job_type,
            experience_level=args.experience,
            location=args.location,
            salary_min=args.salary_min,
        )
    except ValidationError as e:
        parser.error(e.errors()[0]["msg"])
    aggregator = Aggregator(JobStore(settings.DB_URL), settings=settings)
    result = asyncio.run(aggregator.run(args.keywords, args.platform or list(ADAPTERS), filters))

    print("—" * 60)
    for job in result.jobs:
        print(f"[{job.source_platform:9s}] {job.job_title} @ {job.company_name} ({job.location or '—'})")
    for err in result.errors:
        print(f"[error] {err}")
    print("—" * 60)
    print(f"Found {result.job_count} jobs in {result.execution_time_ms} ms, status={result.status} → DB: {settings.DB_URL}")


if __name__ == "__main__":
    main()
