from typing import Optional

from bs4 import BeautifulSoup

from jobfinder.adapters.base import BaseAdapter
from jobfinder.pipeline.fallback import FallbackProfile, SalaryBand
from jobfinder.pipeline.normalize import (
    clean_text,
    extract_next_data,
    infer_job_type,
    parse_experience_level,
    parse_job_type,
    parse_salary,
    parse_work_arrangement,
)


SEARCH_URL = "https://www.hiredly.com/jobs/search"
JOB_URL = "https://www.hiredly.com/jobs/{id}"

PROFILE = FallbackProfile(
    platform="hiredly",
    label="Hiredly",
    count=4,
    companies=(
        ("Grab Malaysia", None),
        ("Lazada", None),
        ("Touch n Go", None),
        ("Fave", None),
        ("Carsome", None),
    ),
    titles=("{keyword} Executive", "{keyword} Coordinator", "{keyword} Specialist"),
    job_types=("Full-time",),
    arrangements=("Hybrid", "Remote", "On-site"),
    levels=("Mid Level",),
    locations=("Kuala Lumpur",),
    standard_band=SalaryBand(3500, 1000, 5500, 1500),
    internship_band=SalaryBand(800, 150, 1500, 200),
    day_step=3,
    description=(
        "Exciting opportunity to work as a {title} at a fast-growing tech company! We value "
        "innovation, collaboration, and work-life balance. Join our mission to transform digital "
        "experiences in Southeast Asia."
    ),
)


def _text(value) -> Optional[str]:
    return (value.strip() or None) if isinstance(value, str) else None


class HiredlyAdapter(BaseAdapter):
    """Hiredly is a Next.js site: the search results sit in __NEXT_DATA__ pageProps."""
    source_name = "hiredly"
    fallback_profile = PROFILE

    async def search(self, client, keyword, filters):
        r = await client.get(SEARCH_URL, params={"q": keyword})
        r.raise_for_status()
        data = extract_next_data(BeautifulSoup(r.text, "lxml")) or {}
        page_props = (data.get("props") or {}).get("pageProps") or {}
        items = page_props.get("jobs")
        if not isinstance(items, list):
            return []
        return [self._from_item(j) for j in items if isinstance(j, dict)]

    def _from_item(self, j: dict):
        company = j.get("company") if isinstance(j.get("company"), dict) else {}
        salary = j.get("salary") if isinstance(j.get("salary"), dict) else {}
        max_length = self.settings.DESCRIPTION_MAX_LENGTH

        title = _text(j.get("title")) or _text(j.get("position")) or "Untitled Position"
        fields = {
            "job_title": title,
            "company_name": _text(company.get("name")) or _text(j.get("companyName")) or "Unknown Company",
            "location": _text(j.get("location")) or _text(j.get("city")) or "Malaysia",
            "job_type": parse_job_type(j.get("employmentType") or j.get("jobType")) or infer_job_type(title) or "Full-time",
            "work_arrangement": parse_work_arrangement(j.get("workType"), default="On-site"),
            "salary_min": parse_salary(j.get("salaryMin") or salary.get("min")),
            "salary_max": parse_salary(j.get("salaryMax") or salary.get("max")),
            "salary_currency": "MYR",
            "salary_period": "month",
            "description": clean_text(j.get("description") or j.get("summary"), max_length),
            "posted_date": _text(j.get("postedAt")) or _text(j.get("createdAt")),
            "experience_level": parse_experience_level(j.get("experienceLevel") or j.get("seniority")),
            "industry": _text(company.get("industry")),
            "company_size": _text(company.get("size")),
            "logo_url": _text(company.get("logo")) or _text(j.get("companyLogo")),
        }
        url = _text(j.get("url"))
        if not url and j.get("id"):
            url = JOB_URL.format(id=j["id"])
        return self._listing(fields, url)
