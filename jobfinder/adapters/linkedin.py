"""
LinkedIn jobs through the RapidAPI "linkedin-jobs-search" API.

LinkedIn itself cannot be scraped, so without LINKEDIN_RAPIDAPI_KEY the
adapter runs in fallback-only mode and never touches the network.
"""
from jobfinder.adapters.base import BaseAdapter
from jobfinder.pipeline.fallback import FallbackProfile, SalaryBand
from jobfinder.pipeline.normalize import (
    clean_text,
    infer_job_type,
    parse_experience_level,
    parse_job_type,
    parse_work_arrangement,
)


API_HOST = "linkedin-jobs-search.p.rapidapi.com"
API_URL = f"https://{API_HOST}/"

PROFILE = FallbackProfile(
    platform="linkedin",
    label="LinkedIn",
    count=4,
    companies=(
        ("Microsoft Malaysia", "https://logo.clearbit.com/microsoft.com"),
        ("Google Cloud", "https://logo.clearbit.com/google.com"),
        ("Amazon Web Services", "https://logo.clearbit.com/aws.amazon.com"),
        ("Petronas Digital", "https://logo.clearbit.com/petronas.com"),
        ("CIMB Group", "https://logo.clearbit.com/cimb.com"),
        ("Maybank", "https://logo.clearbit.com/maybank.com"),
    ),
    titles=("{keyword} Engineer", "Senior {keyword}", "{keyword} Analyst", "{keyword} Consultant"),
    job_types=("Full-time", "Contract", "Full-time", "Part-time"),
    arrangements=("Hybrid", "Remote", "On-site", "Hybrid"),
    levels=("Entry Level", "Mid Level", "Senior", "Entry Level"),
    locations=(
        "Kuala Lumpur, Malaysia",
        "Petaling Jaya, Selangor",
        "Cyberjaya, Malaysia",
        "Penang, Malaysia",
        "Singapore (Remote)",
    ),
    standard_band=SalaryBand(4000, 2000, 8000, 3000),
    internship_band=SalaryBand(1200, 200, 2000, 300),
    day_step=1,
    description=(
        "{company} is looking for a talented {title} to join our growing team. You will work on "
        "impactful projects, collaborate with world-class engineers, and have opportunities for "
        "professional growth. We offer competitive compensation, flexible work arrangements, and "
        "comprehensive benefits."
    ),
    requirements=(
        "• Bachelor's degree in relevant field\n"
        "• {years}+ years of experience in {keyword}\n"
        "• Strong analytical and problem-solving skills\n"
        "• Excellent communication abilities"
    ),
)


class LinkedInAdapter(BaseAdapter):
    source_name = "linkedin"
    fallback_profile = PROFILE

    @property
    def live(self) -> bool:
        return bool(self.settings.LINKEDIN_RAPIDAPI_KEY)

    async def search(self, client, keyword, filters):
        payload = {
            "search_terms": keyword,
            "location": filters.location or "Malaysia",
            "page": "1",
        }
        headers = {
            "X-RapidAPI-Key": self.settings.LINKEDIN_RAPIDAPI_KEY,
            "X-RapidAPI-Host": API_HOST,
        }
        r = await client.post(API_URL, json=payload, headers=headers)
        r.raise_for_status()
        data = r.json()

        hits = data if isinstance(data, list) else data.get("results", data.get("jobs", []))
        return [self._from_hit(h) for h in hits or [] if isinstance(h, dict)]

    def _from_hit(self, hit: dict):
        title = (hit.get("job_title") or hit.get("title") or "").strip() or "Untitled Position"
        location = hit.get("job_location") or hit.get("location")
        fields = {
            "job_title": title,
            "company_name": hit.get("company_name") or hit.get("company") or "Unknown Company",
            "location": location,
            "job_type": parse_job_type(hit.get("employment_type")) or infer_job_type(title),
            "work_arrangement": parse_work_arrangement("REMOTE" if hit.get("remote") else location),
            "salary_currency": "MYR",
            "salary_period": "month",
            "description": clean_text(hit.get("job_description") or hit.get("description"),
                                      self.settings.DESCRIPTION_MAX_LENGTH),
            "posted_date": hit.get("posted_date") or hit.get("posted_at"),
            "experience_level": parse_experience_level(hit.get("seniority_level") or title),
            "logo_url": hit.get("company_logo"),
        }
        url = hit.get("linkedin_job_url_cleaned") or hit.get("job_url") or hit.get("url")
        return self._listing(fields, url)
