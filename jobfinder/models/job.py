import re
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Platform(str, Enum):
    JOBSTREET = "jobstreet"
    LINKEDIN = "linkedin"
    INDEED = "indeed"
    HIREDLY = "hiredly"


class JobType(str, Enum):
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    CONTRACT = "Contract"
    INTERNSHIP = "Internship"
    FREELANCE = "Freelance"


# Keys are upper-cased with spaces/dashes folded to "_"
EMPLOYMENT_TYPES: dict[str, JobType] = {
    "FULL_TIME": JobType.FULL_TIME,
    "FULLTIME": JobType.FULL_TIME,
    "PERMANENT": JobType.FULL_TIME,
    "PART_TIME": JobType.PART_TIME,
    "PARTTIME": JobType.PART_TIME,
    "CONTRACT": JobType.CONTRACT,
    "CONTRACTOR": JobType.CONTRACT,
    "TEMPORARY": JobType.CONTRACT,
    "TEMP": JobType.CONTRACT,
    "INTERN": JobType.INTERNSHIP,
    "INTERNSHIP": JobType.INTERNSHIP,
    "FREELANCE": JobType.FREELANCE,
    "PER_DIEM": JobType.FREELANCE,
}


def job_type_from(value: str) -> Optional[JobType]:
    key = re.sub(r"[\s\-]+", "_", value.strip().upper())
    return EMPLOYMENT_TYPES.get(key)


class WorkArrangement(str, Enum):
    REMOTE = "Remote"
    HYBRID = "Hybrid"
    ON_SITE = "On-site"


EXPERIENCE_LEVELS = ["Entry Level", "Mid Level", "Senior", "Executive"]


class JobListing(BaseModel):
    """Canonical, platform-agnostic job listing. `original_url` is the natural key."""
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    id: Optional[int] = None
    job_title: str
    company_name: str
    location: Optional[str] = None
    job_type: Optional[JobType] = None
    work_arrangement: Optional[WorkArrangement] = None
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    salary_currency: Optional[str] = None
    salary_period: Optional[str] = None
    description: Optional[str] = None
    requirements: Optional[str] = None
    benefits: Optional[str] = None
    posted_date: Optional[str] = None
    deadline_date: Optional[str] = None
    original_url: str = Field(min_length=1)
    source_platform: Platform
    experience_level: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    logo_url: Optional[str] = None
    scraped_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="after")
    def _order_salary_range(self):
        # Sources occasionally publish the bounds reversed
        if self.salary_min is not None and self.salary_max is not None and self.salary_min > self.salary_max:
            self.salary_min, self.salary_max = self.salary_max, self.salary_min
        return self

    def storage_fields(self) -> dict:
        """Column values written on upsert; store-managed columns are left out."""
        return self.model_dump(exclude={"id", "created_at", "updated_at"})


class SearchFilters(BaseModel):
    """Optional search constraints. Accepts the camelCase names used on the wire."""
    model_config = ConfigDict(populate_by_name=True)

    job_type: list[str] = Field(default_factory=list, alias="jobType")
    location: Optional[str] = None
    experience_level: list[str] = Field(default_factory=list, alias="experienceLevel")
    work_arrangement: list[str] = Field(default_factory=list, alias="workArrangement")
    salary_min: Optional[float] = Field(default=None, alias="salaryMin")

    @field_validator("job_type")
    @classmethod
    def _canonical_job_types(cls, values: list[str]) -> list[str]:
        # Listings carry canonical job types, so requests are compared in the same vocabulary
        canonical: list[str] = []
        for value in values:
            job_type = job_type_from(value)
            if job_type is None:
                raise ValueError(f"Unknown job type: {value}")
            if job_type.value not in canonical:
                canonical.append(job_type.value)
        return canonical

    def wants_internship(self) -> bool:
        return any("intern" in t.lower() for t in self.job_type)
