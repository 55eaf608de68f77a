# jobfinder/pipeline/orchestrator.py
from __future__ import annotations

import asyncio
import time
from typing import Mapping, Optional, Sequence

from jobfinder.adapters.base import BaseAdapter
from jobfinder.adapters.registry import build_adapters
from jobfinder.errors import SearchValidationError, UnknownPlatformError
from jobfinder.log import get_logger
from jobfinder.models.job import JobListing, SearchFilters
from jobfinder.models.search import AggregationResult, ScrapeLog, ScrapeStatus
from jobfinder.pipeline.storage import JobStore
from jobfinder.settings import Settings, settings as default_settings

log = get_logger(__name__)


def _reason(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class Aggregator:
    """
    Runs one search across several platforms at once.

    Every platform is awaited to completion; a platform that raises only
    adds an "<platform>: <reason>" entry to the errors. Listings are
    upserted by original_url and every valid run leaves one scrape log.
    """

    def __init__(
        self,
        store: JobStore,
        settings: Settings = default_settings,
        adapters: Optional[Mapping[str, BaseAdapter]] = None,
    ):
        self.store = store
        self.settings = settings
        self.adapters = dict(adapters) if adapters is not None else build_adapters(settings)

    async def run(
        self,
        keywords: Sequence[str],
        platforms: Sequence[str],
        filters: Optional[SearchFilters] = None,
        user_id: Optional[str] = None,
    ) -> AggregationResult:
        keywords = [k.strip() for k in keywords or [] if k and k.strip()]
        if not keywords:
            raise SearchValidationError("Keywords are required")
        platforms = [p.strip().lower() for p in platforms or [] if p and p.strip()]
        if not platforms:
            raise SearchValidationError("At least one platform is required")

        filters = filters or SearchFilters()
        if self.settings.FORCE_LOCATION:
            filters = filters.model_copy(update={"location": self.settings.FORCE_LOCATION})

        started = time.perf_counter()
        log.info("[run] keywords=%s platforms=%s", keywords, platforms)

        results = await asyncio.gather(
            *(self._fetch_platform(p, keywords, filters) for p in platforms),
            return_exceptions=True,
        )

        # gather keeps request order, so results line up with platforms
        jobs: list[JobListing] = []
        errors: list[str] = []
        for platform, result in zip(platforms, results):
            if isinstance(result, Exception):
                log.warning("[skip] %s error: %s", platform, _reason(result))
                errors.append(f"{platform}: {_reason(result)}")
            elif isinstance(result, BaseException):
                raise result
            else:
                log.info("[done] %-10s jobs=%4d", platform, len(result))
                jobs.extend(result)

        if jobs:
            await self._persist(jobs)
        execution_time_ms = int((time.perf_counter() - started) * 1000)

        status = ScrapeStatus.derive(errors, len(jobs))
        await self._audit(ScrapeLog(
            user_id=user_id,
            search_query={
                "keywords": keywords,
                "filters": filters.model_dump(mode="json", by_alias=True, exclude_none=True),
            },
            platforms_scraped=platforms,
            total_results=len(jobs),
            status=status,
            error_message="; ".join(errors) if errors else None,
            execution_time_ms=execution_time_ms,
        ))

        return AggregationResult(
            job_count=len(jobs),
            jobs=jobs,
            errors=errors,
            execution_time_ms=execution_time_ms,
            status=status,
        )

    async def _fetch_platform(self, platform: str, keywords: list[str], filters: SearchFilters) -> list[JobListing]:
        adapter = self.adapters.get(platform)
        if adapter is None:
            raise UnknownPlatformError(platform)
        return await adapter.fetch(keywords, filters)

    async def _persist(self, jobs: list[JobListing]) -> None:
        # A failed save must not cost the caller the fresh results
        try:
            await asyncio.to_thread(self.store.upsert_listings, jobs)
        except Exception:
            log.exception("Error upserting %d jobs", len(jobs))

    async def _audit(self, entry: ScrapeLog) -> None:
        try:
            await asyncio.to_thread(self.store.insert_scrape_log, entry)
        except Exception:
            log.exception("Error writing scrape log")
