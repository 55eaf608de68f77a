from sqlalchemy import Column, String, DateTime, Float, ForeignKey, Integer, Text, JSON, UniqueConstraint
from sqlalchemy.sql import func
from db.base import Base


class JobListingRow(Base):
    __tablename__ = "job_listings"
    id = Column(Integer, primary_key=True, autoincrement=True)
    job_title = Column(String(300), nullable=False)
    company_name = Column(String(200), nullable=False)
    location = Column(String(200), nullable=True)
    job_type = Column(String(20), nullable=True)
    work_arrangement = Column(String(20), nullable=True)
    salary_min = Column(Float, nullable=True)
    salary_max = Column(Float, nullable=True)
    salary_currency = Column(String(10), nullable=True)
    salary_period = Column(String(20), nullable=True)
    description = Column(Text, nullable=True)
    requirements = Column(Text, nullable=True)
    benefits = Column(Text, nullable=True)
    posted_date = Column(String(100), nullable=True)
    deadline_date = Column(String(100), nullable=True)
    original_url = Column(String(1000), nullable=False, unique=True)
    source_platform = Column(String(20), nullable=False, index=True)
    experience_level = Column(String(50), nullable=True)
    industry = Column(String(200), nullable=True)
    company_size = Column(String(50), nullable=True)
    logo_url = Column(String(1000), nullable=True)
    scraped_at = Column(DateTime(timezone=True), server_default=func.now())
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class ScrapeLogRow(Base):
    __tablename__ = "scrape_logs"
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(100), nullable=True)
    search_query = Column(JSON, nullable=False)
    platforms_scraped = Column(JSON, nullable=False)
    total_results = Column(Integer, nullable=True)
    status = Column(String(10), nullable=False)
    error_message = Column(Text, nullable=True)
    execution_time_ms = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class BookmarkedJobRow(Base):
    # Written by the bookmark flow only; listed here so listings can be joined by id
    __tablename__ = "bookmarked_jobs"
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(100), nullable=False)
    job_listing_id = Column(Integer, ForeignKey("job_listings.id", ondelete="CASCADE"), nullable=False)
    notes = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="saved")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    __table_args__ = (
        UniqueConstraint("user_id", "job_listing_id", name="uq_user_job"),
    )
