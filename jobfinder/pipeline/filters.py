from typing import Iterable

from jobfinder.models.job import JobListing, SearchFilters


def passes_filters(job: JobListing, filters: SearchFilters) -> bool:
    """
    AND across the requested dimensions. A listing that lacks the attribute
    being filtered on is kept.
    """
    if filters.job_type and job.job_type:
        if job.job_type not in filters.job_type:
            return False
    if filters.salary_min is not None and job.salary_max is not None:
        if job.salary_max < filters.salary_min:
            return False
    if filters.experience_level and job.experience_level:
        if job.experience_level not in filters.experience_level:
            return False
    return True


def apply_filters(jobs: Iterable[JobListing], filters: SearchFilters) -> list[JobListing]:
    return [job for job in jobs if passes_filters(job, filters)]
