from datetime import datetime
from typing import Optional

from jobfinder.adapters.base import BaseAdapter, ClientFactory, Clock
from jobfinder.adapters.hiredly import HiredlyAdapter
from jobfinder.adapters.indeed import IndeedAdapter
from jobfinder.adapters.jobstreet import JobStreetAdapter
from jobfinder.adapters.linkedin import LinkedInAdapter
from jobfinder.errors import UnknownPlatformError
from jobfinder.models.job import JobListing, SearchFilters
from jobfinder.pipeline.fallback import generate
from jobfinder.settings import Settings, settings as default_settings


ADAPTERS: dict[str, type[BaseAdapter]] = {
    cls.source_name: cls
    for cls in (JobStreetAdapter, LinkedInAdapter, IndeedAdapter, HiredlyAdapter)
}


def adapter_class(platform: str) -> type[BaseAdapter]:
    try:
        return ADAPTERS[platform.lower()]
    except KeyError:
        raise UnknownPlatformError(platform) from None


def build_adapters(
    settings: Settings = default_settings,
    client_factory: Optional[ClientFactory] = None,
    clock: Optional[Clock] = None,
) -> dict[str, BaseAdapter]:
    return {
        name: cls(settings=settings, client_factory=client_factory, clock=clock)
        for name, cls in ADAPTERS.items()
    }


def generate_fallback(
    keyword: str,
    platform: str,
    filters: SearchFilters,
    now: Optional[datetime] = None,
) -> list[JobListing]:
    """Sample listings for `keyword` in the given platform's style."""
    return generate(keyword, adapter_class(platform).fallback_profile, filters, now=now)
