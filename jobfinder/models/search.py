from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from jobfinder.models.job import JobListing, SearchFilters


class ScrapeStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"

    @classmethod
    def derive(cls, errors: list[str], job_count: int) -> "ScrapeStatus":
        if not errors:
            return cls.SUCCESS
        return cls.PARTIAL if job_count > 0 else cls.FAILED


class SearchRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    keywords: list[str] = Field(default_factory=list)
    platforms: list[str] = Field(default_factory=list)
    filters: SearchFilters = Field(default_factory=SearchFilters)
    user_id: Optional[str] = Field(default=None, alias="userId")


class ScrapeLog(BaseModel):
    """Audit record for one aggregation run."""
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    id: Optional[int] = None
    user_id: Optional[str] = None
    search_query: dict[str, Any]
    platforms_scraped: list[str]
    total_results: int = 0
    status: ScrapeStatus
    error_message: Optional[str] = None
    execution_time_ms: Optional[int] = None
    created_at: Optional[datetime] = None


class AggregationResult(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    job_count: int
    jobs: list[JobListing]
    errors: list[str]
    execution_time_ms: int
    status: ScrapeStatus

    def to_response(self) -> dict:
        return {
            "success": True,
            "jobCount": self.job_count,
            "jobs": [j.model_dump(mode="json") for j in self.jobs],
            "errors": self.errors or None,
            "executionTime": self.execution_time_ms,
            "status": self.status,
        }


class PageMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")


class JobPage(BaseModel):
    data: list[JobListing]
    meta: PageMeta

    def to_response(self) -> dict:
        return {
            "data": [j.model_dump(mode="json") for j in self.data],
            "meta": self.meta.model_dump(by_alias=True),
        }
