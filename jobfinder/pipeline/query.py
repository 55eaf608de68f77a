import math
from typing import Optional

from jobfinder.errors import QueryValidationError
from jobfinder.models.search import JobPage, PageMeta
from jobfinder.pipeline.storage import JobStore
from jobfinder.settings import Settings, settings as default_settings


def list_jobs(
    store: JobStore,
    page: int = 1,
    limit: Optional[int] = None,
    keywords: Optional[str] = None,
    location: Optional[str] = None,
    job_type: Optional[str] = None,
    settings: Settings = default_settings,
) -> JobPage:
    """
    One page of stored listings, newest first.

    `keywords` matches title or description, `location` is a substring
    match, both case-insensitive; `job_type` must match exactly. `limit`
    is capped at LIST_MAX_LIMIT.
    """
    if limit is None:
        limit = settings.LIST_DEFAULT_LIMIT
    if page < 1:
        raise QueryValidationError("page must be a positive integer")
    if limit < 1:
        raise QueryValidationError("limit must be a positive integer")
    limit = min(limit, settings.LIST_MAX_LIMIT)

    rows, total = store.query_listings(
        offset=(page - 1) * limit,
        limit=limit,
        keywords=keywords or None,
        location=location or None,
        job_type=job_type or None,
    )
    total_pages = math.ceil(total / limit) if total else 0
    return JobPage(data=rows, meta=PageMeta(page=page, limit=limit, total=total, total_pages=total_pages))
