import asyncio
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

import httpx

from jobfinder.client.http import get_client
from jobfinder.log import get_logger
from jobfinder.models.job import JobListing, SearchFilters
from jobfinder.pipeline.fallback import FallbackProfile, fallback_url, generate
from jobfinder.pipeline.filters import apply_filters
from jobfinder.settings import Settings, settings as default_settings

ClientFactory = Callable[[], httpx.AsyncClient]
Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseAdapter:
    """
    Searches one platform keyword by keyword. A keyword whose live search
    fails or finds nothing is answered with fallback listings instead, so
    `fetch` itself does not raise for per-keyword problems.
    """
    source_name: str
    fallback_profile: FallbackProfile

    def __init__(
        self,
        settings: Settings = default_settings,
        client_factory: Optional[ClientFactory] = None,
        clock: Optional[Clock] = None,
    ):
        self.settings = settings
        self.client_factory = client_factory or (lambda: get_client(settings))
        self.clock = clock or utcnow
        self.request_delay = settings.REQUEST_DELAYS.get(self.source_name, 0.0)
        self.log = get_logger(f"jobfinder.adapters.{self.source_name}")

    @property
    def live(self) -> bool:
        return True

    async def fetch(self, keywords: Sequence[str], filters: SearchFilters) -> list[JobListing]:
        jobs: list[JobListing] = []
        if not self.live:
            self.log.info("[%s] fallback-only mode, generating sample jobs for %d keyword(s)",
                          self.source_name, len(keywords))
            for keyword in keywords:
                jobs.extend(self.generate_fallback(keyword, filters))
            return apply_filters(jobs, filters)

        async with self.client_factory() as client:
            answered = False
            for keyword in keywords:
                # Pause only after the site actually answered the previous keyword
                if answered:
                    await asyncio.sleep(self.request_delay)
                found, answered = await self._search_keyword(client, keyword, filters)
                jobs.extend(found)
        return apply_filters(jobs, filters)

    async def _search_keyword(
        self, client: httpx.AsyncClient, keyword: str, filters: SearchFilters
    ) -> tuple[list[JobListing], bool]:
        """Listings for one keyword, and whether the live search completed."""
        self.log.info("[%s] searching for %r", self.source_name, keyword)
        try:
            found = await self.search(client, keyword, filters)
            answered = True
        except httpx.HTTPStatusError as e:
            self.log.warning("[%s] HTTP %s for %r → %s", self.source_name,
                             e.response.status_code, keyword, e.request.url)
            found = []
            answered = False
        except Exception as e:
            self.log.warning("[%s] search for %r failed: %s", self.source_name, keyword, e)
            found = []
            answered = False

        if not found:
            self.log.info("[%s] no live results for %r, using sample jobs", self.source_name, keyword)
            return self.generate_fallback(keyword, filters), answered
        return found, answered

    async def search(self, client: httpx.AsyncClient, keyword: str, filters: SearchFilters) -> list[JobListing]:
        """One live search; may raise, an empty result triggers the fallback."""
        raise NotImplementedError

    def generate_fallback(self, keyword: str, filters: SearchFilters) -> list[JobListing]:
        return generate(keyword, self.fallback_profile, filters, now=self.clock())

    def _listing(self, fields: dict, url: Optional[str]) -> JobListing:
        if not url:
            url = fallback_url(fields["job_title"], fields["company_name"], self.fallback_profile.label)
        return JobListing(**fields, original_url=url, source_platform=self.source_name, scraped_at=self.clock())
