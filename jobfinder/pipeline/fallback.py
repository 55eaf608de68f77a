"""
Sample listings used when a platform cannot be searched live.

Each adapter owns a FallbackProfile describing its platform's flavour
(company pool, title patterns, salary bands). The output for a given
keyword, filters and clock value is fully reproducible, and stays
consistent with the requested filters: the requested job type, location,
arrangement and experience level are used when supplied.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from urllib.parse import urlencode

from jobfinder.models.job import JobListing, JobType, SearchFilters
from jobfinder.pipeline.normalize import parse_work_arrangement

SEARCH_FALLBACK_URL = "https://www.google.com/search"


@dataclass(frozen=True)
class SalaryBand:
    min_base: float
    min_step: float
    max_base: float
    max_step: float

    def at(self, i: int) -> tuple[float, float]:
        return self.min_base + i * self.min_step, self.max_base + i * self.max_step


@dataclass(frozen=True)
class FallbackProfile:
    platform: str
    label: str
    count: int
    # (name, logo url)
    companies: tuple[tuple[str, Optional[str]], ...]
    # "{keyword}" is replaced with the capitalised keyword
    titles: tuple[str, ...]
    job_types: tuple[str, ...]
    arrangements: tuple[str, ...]
    levels: tuple[str, ...]
    locations: tuple[str, ...]
    standard_band: SalaryBand
    internship_band: SalaryBand
    day_step: int
    description: str
    requirements: Optional[str] = None


def fallback_url(title: str, company: str, label: str) -> str:
    return f"{SEARCH_FALLBACK_URL}?{urlencode({'q': f'{title} {company} {label} Malaysia'})}"


def generate(
    keyword: str,
    profile: FallbackProfile,
    filters: SearchFilters,
    now: Optional[datetime] = None,
) -> list[JobListing]:
    now = now or datetime.now(timezone.utc)
    keyword = keyword.strip()
    display = keyword[:1].upper() + keyword[1:]
    internship = filters.wants_internship()
    requested_type = filters.job_type[0] if filters.job_type else None
    requested_arrangement = (
        parse_work_arrangement(filters.work_arrangement[0]) if filters.work_arrangement else None
    )

    jobs = []
    for i in range(profile.count):
        company, logo = profile.companies[i % len(profile.companies)]
        if internship:
            title = f"{display} Intern"
            job_type = JobType.INTERNSHIP.value
            level = "Entry Level"
            salary_min, salary_max = profile.internship_band.at(i)
        else:
            title = profile.titles[i % len(profile.titles)].format(keyword=display)
            job_type = requested_type or profile.job_types[i % len(profile.job_types)]
            level = filters.experience_level[0] if filters.experience_level else profile.levels[i % len(profile.levels)]
            salary_min, salary_max = profile.standard_band.at(i)

        jobs.append(JobListing(
            job_title=title,
            company_name=company,
            location=filters.location or profile.locations[i % len(profile.locations)],
            job_type=job_type,
            work_arrangement=requested_arrangement or profile.arrangements[i % len(profile.arrangements)],
            salary_min=salary_min,
            salary_max=salary_max,
            salary_currency="MYR",
            salary_period="month",
            description=profile.description.format(title=title, company=company, keyword=keyword),
            requirements=profile.requirements.format(keyword=keyword, years=i + 1) if profile.requirements else None,
            posted_date=(now - timedelta(days=i * profile.day_step)).isoformat(),
            original_url=fallback_url(title, company, profile.label),
            source_platform=profile.platform,
            experience_level=level,
            logo_url=logo,
            scraped_at=now,
        ))
    return jobs
