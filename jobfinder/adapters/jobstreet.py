from bs4 import BeautifulSoup

from jobfinder.adapters.base import BaseAdapter
from jobfinder.pipeline.fallback import FallbackProfile, SalaryBand
from jobfinder.pipeline.normalize import extract_ld_job_postings, ld_posting_fields


SEARCH_URL = "https://www.jobstreet.com.my/jobs"

PROFILE = FallbackProfile(
    platform="jobstreet",
    label="JobStreet",
    count=5,
    companies=(
        ("Tech Solutions Sdn Bhd", None),
        ("Digital Ventures Malaysia", None),
        ("Innovation Labs", None),
        ("Global Systems MY", None),
        ("StartUp Hub KL", None),
    ),
    titles=("{keyword} Specialist", "{keyword} Associate", "{keyword} Manager", "{keyword} Executive", "{keyword} Lead"),
    job_types=("Full-time", "Part-time", "Contract", "Full-time", "Freelance"),
    arrangements=("Remote", "Hybrid", "On-site"),
    levels=("Entry Level", "Mid Level", "Senior", "Entry Level", "Mid Level"),
    locations=("Kuala Lumpur", "Petaling Jaya", "Cyberjaya", "Penang", "Johor Bahru"),
    standard_band=SalaryBand(3000, 1000, 5000, 1500),
    internship_band=SalaryBand(900, 150, 1500, 200),
    day_step=1,
    description=(
        "We are seeking a talented {keyword} professional to join our team. This is an exciting "
        "opportunity to work on cutting-edge projects and grow your career. Requirements include "
        "strong analytical skills, excellent communication, and a passion for innovation."
    ),
)


class JobStreetAdapter(BaseAdapter):
    """JobStreet Malaysia search page; listings come from its JSON-LD JobPosting blocks."""
    source_name = "jobstreet"
    fallback_profile = PROFILE

    async def search(self, client, keyword, filters):
        params = {"keywords": keyword}
        if filters.location:
            params["location"] = filters.location
        r = await client.get(SEARCH_URL, params=params)
        r.raise_for_status()
        soup = BeautifulSoup(r.text, "lxml")

        jobs = []
        for posting in extract_ld_job_postings(soup):
            fields = ld_posting_fields(posting, self.settings.DESCRIPTION_MAX_LENGTH)
            fields["location"] = fields["location"] or filters.location
            jobs.append(self._listing(fields, posting.get("url")))
        return jobs
