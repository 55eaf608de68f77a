# jobfinder/pipeline/normalize.py
import json
import math
import re
from typing import Any, Optional

from bs4 import BeautifulSoup

from jobfinder.models.job import EXPERIENCE_LEVELS, JobType, WorkArrangement, job_type_from

# Strong internship signals in a TITLE (EN + MY)
INTERNSHIP_TERMS_TITLE = [
    r"\bintern\b",
    r"\binternship\b",
    r"\btrainee\b",
    r"\bindustrial training\b",
    r"\blatihan industri\b",
    r"\bpraktikal\b",
    r"\bplacement\b",
]

# ---------------------------
# Experience levels
# ---------------------------
EXPERIENCE_TERMS: dict[str, list[str]] = {
    "Entry Level": [r"\bentry\b", r"\bjunior\b", r"\bgraduate\b", r"\bfresh\b", r"\binternship\b", r"\bintern\b"],
    "Mid Level": [r"\bmid\b", r"\bintermediate\b", r"\bassociate\b", r"\bexperienced\b"],
    "Senior": [r"\bsenior\b", r"\blead\b", r"\bprincipal\b", r"\bstaff\b"],
    "Executive": [r"\bexecutive\b", r"\bdirector\b", r"\bhead\b", r"\bvp\b", r"\bc-level\b", r"\bmanager\b"],
}


def _join(pats: list[str]) -> re.Pattern:
    return re.compile("|".join(pats), re.I)

_intern_re = _join(INTERNSHIP_TERMS_TITLE)
_experience_res = {level: _join(pats) for level, pats in EXPERIENCE_TERMS.items()}
_ws_re = re.compile(r"\s+")


# ---------------------
# Field coercion
# ---------------------
def parse_job_type(employment_type: Any) -> Optional[str]:
    """Map a source employment type (string or list, first wins) onto the canonical enum."""
    if not employment_type:
        return None
    value = employment_type[0] if isinstance(employment_type, (list, tuple)) else employment_type
    if not isinstance(value, str):
        return None
    job_type = job_type_from(value)
    return job_type.value if job_type else None


def infer_job_type(title: str | None) -> Optional[str]:
    """Only internships can be told apart from the title alone."""
    if title and _intern_re.search(title):
        return JobType.INTERNSHIP.value
    return None


def parse_work_arrangement(location_type: Any, default: Optional[str] = None) -> Optional[str]:
    if not location_type or not isinstance(location_type, str):
        return default
    value = location_type.upper()
    if "REMOTE" in value or "TELECOMMUTE" in value:
        return WorkArrangement.REMOTE.value
    if "HYBRID" in value:
        return WorkArrangement.HYBRID.value
    return WorkArrangement.ON_SITE.value


def parse_location_type(location_type: Any, default: Optional[str] = None) -> Optional[str]:
    """schema.org jobLocationType: TELECOMMUTE means remote, any other value is on-site."""
    if not location_type or not isinstance(location_type, str):
        return default
    value = location_type.upper()
    if "REMOTE" in value or "TELECOMMUTE" in value:
        return WorkArrangement.REMOTE.value
    return WorkArrangement.ON_SITE.value


def parse_experience_level(value: Any) -> Optional[str]:
    if not value or not isinstance(value, str):
        return None
    for level in EXPERIENCE_LEVELS:
        if value.strip().lower() == level.lower():
            return level
    for level, pattern in _experience_res.items():
        if pattern.search(value):
            return level
    return None


def parse_salary(value: Any) -> Optional[float]:
    """Numeric salary or None; zero and unparseable values count as missing."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.replace(",", "").strip()
        if not value:
            return None
    try:
        num = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(num) or num == 0:
        return None
    return num


def clean_text(text: Any, max_length: int = 2000) -> Optional[str]:
    """Strip HTML, collapse whitespace and cap the length of free text."""
    if not text or not isinstance(text, str):
        return None
    if "<" in text or "&" in text:
        text = BeautifulSoup(text, "lxml").get_text(" ")
    text = _ws_re.sub(" ", text).strip()
    return text[:max_length] or None


# ---------------------
# Embedded data islands
# ---------------------
def _postings_in(obj: Any) -> list[dict]:
    if isinstance(obj, list):
        found = []
        for o in obj:
            found.extend(_postings_in(o))
        return found
    if not isinstance(obj, dict):
        return []
    kind = obj.get("@type")
    if kind == "JobPosting":
        return [obj]
    if kind == "ItemList":
        found = []
        for item in obj.get("itemListElement") or []:
            if not isinstance(item, dict):
                continue
            if item.get("@type") == "JobPosting":
                found.append(item)
            elif isinstance(item.get("item"), dict) and item["item"].get("@type") == "JobPosting":
                found.append(item["item"])
        return found
    if "@graph" in obj:
        return _postings_in(obj["@graph"])
    return []


def extract_ld_job_postings(soup: BeautifulSoup) -> list[dict]:
    """All JSON-LD JobPosting objects on a page, including ItemList members."""
    postings = []
    for tag in soup.find_all("script", type="application/ld+json"):
        try:
            obj = json.loads(tag.get_text() or "{}")
        except ValueError:
            continue
        postings.extend(_postings_in(obj))
    return postings


def extract_next_data(soup: BeautifulSoup) -> Optional[dict]:
    script = soup.find("script", id="__NEXT_DATA__")
    if not script or not script.string:
        return None
    try:
        data = json.loads(script.string)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


# ---------------------
# JSON-LD JobPosting -> canonical fields
# ---------------------
def _first(value: Any) -> Any:
    if isinstance(value, list):
        return value[0] if value else None
    return value


def ld_location(job: dict) -> Optional[str]:
    loc = _first(job.get("jobLocation"))
    if not isinstance(loc, dict):
        return None
    addr = loc.get("address")
    if isinstance(addr, str):
        return addr or None
    if not isinstance(addr, dict):
        return None
    return addr.get("addressLocality") or addr.get("addressRegion") or None


def ld_posting_fields(job: dict, max_length: int = 2000) -> dict:
    """Canonical JobListing fields from a schema.org JobPosting; url/platform are left to the caller."""
    org = job.get("hiringOrganization")
    company = org.get("name") if isinstance(org, dict) else org
    logo = org.get("logo") if isinstance(org, dict) else None
    if isinstance(logo, dict):
        logo = logo.get("url")

    salary = job.get("baseSalary") if isinstance(job.get("baseSalary"), dict) else {}
    value = salary.get("value")
    if not isinstance(value, dict):
        value = {"minValue": value, "maxValue": value}
    unit = value.get("unitText")

    title = (job.get("title") or "").strip() or "Untitled Position"
    return {
        "job_title": title,
        "company_name": company or "Unknown Company",
        "location": ld_location(job),
        "job_type": parse_job_type(job.get("employmentType")) or infer_job_type(title),
        "work_arrangement": parse_location_type(job.get("jobLocationType")),
        "salary_min": parse_salary(value.get("minValue")),
        "salary_max": parse_salary(value.get("maxValue")),
        "salary_currency": salary.get("currency") or "MYR",
        "salary_period": unit.lower() if isinstance(unit, str) else "month",
        "description": clean_text(job.get("description"), max_length),
        "requirements": clean_text(job.get("qualifications") or job.get("experienceRequirements"), max_length),
        "benefits": clean_text(job.get("jobBenefits"), max_length),
        "posted_date": job.get("datePosted") if isinstance(job.get("datePosted"), str) else None,
        "deadline_date": job.get("validThrough") if isinstance(job.get("validThrough"), str) else None,
        "industry": _first(job.get("industry")) if isinstance(_first(job.get("industry")), str) else None,
        "logo_url": logo if isinstance(logo, str) else None,
    }
