from typing import Optional

from bs4 import BeautifulSoup

from jobfinder.adapters.base import BaseAdapter
from jobfinder.models.job import SearchFilters
from jobfinder.pipeline.fallback import FallbackProfile, SalaryBand
from jobfinder.pipeline.normalize import extract_ld_job_postings, ld_posting_fields, parse_location_type


SEARCH_URL = "https://my.indeed.com/jobs"

# Checked in this order; the first requested type wins
JOB_TYPE_PARAMS = [
    ("Internship", "internship"),
    ("Full-time", "fulltime"),
    ("Part-time", "parttime"),
    ("Contract", "contract"),
]

PROFILE = FallbackProfile(
    platform="indeed",
    label="Indeed",
    count=4,
    companies=(
        ("Acme Corporation", None),
        ("BlueTech Solutions", None),
        ("DataCorp Malaysia", None),
        ("Excel Industries", None),
        ("Future Systems", None),
    ),
    titles=("Junior {keyword}", "Senior {keyword}", "{keyword}", "Lead {keyword}"),
    job_types=("Full-time", "Part-time", "Contract", "Freelance"),
    arrangements=("Remote", "Hybrid", "On-site"),
    levels=("Entry Level", "Senior", "Mid Level", "Senior"),
    locations=("Kuala Lumpur", "Selangor", "Penang", "Johor", "Sabah"),
    standard_band=SalaryBand(2500, 800, 4500, 1200),
    internship_band=SalaryBand(800, 150, 1400, 200),
    day_step=2,
    description=(
        "Join our dynamic team as a {keyword}! We offer competitive benefits, career growth "
        "opportunities, and a collaborative work environment. Looking for motivated individuals "
        "with strong problem-solving skills."
    ),
)


def job_type_param(filters: SearchFilters) -> Optional[str]:
    for job_type, param in JOB_TYPE_PARAMS:
        if job_type in filters.job_type:
            return param
    return None


class IndeedAdapter(BaseAdapter):
    """Indeed Malaysia search page (JSON-LD JobPosting or ItemList of postings)."""
    source_name = "indeed"
    fallback_profile = PROFILE

    async def search(self, client, keyword, filters):
        params = {"q": keyword, "l": filters.location or "Malaysia"}
        jt = job_type_param(filters)
        if jt:
            params["jt"] = jt
        r = await client.get(SEARCH_URL, params=params, headers={"Cache-Control": "no-cache"})
        r.raise_for_status()
        soup = BeautifulSoup(r.text, "lxml")

        jobs = []
        for posting in extract_ld_job_postings(soup):
            fields = ld_posting_fields(posting, self.settings.DESCRIPTION_MAX_LENGTH)
            fields["work_arrangement"] = parse_location_type(posting.get("jobLocationType"), default="On-site")
            jobs.append(self._listing(fields, posting.get("url")))
        return jobs
