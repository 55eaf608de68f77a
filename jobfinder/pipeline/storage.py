from contextlib import contextmanager
from typing import Optional, Sequence

from sqlalchemy import create_engine, or_
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db.base import Base
from db.schemas import JobListingRow, ScrapeLogRow
from jobfinder.models.job import JobListing
from jobfinder.models.search import ScrapeLog


def init_engine(db_url: str):
    kwargs = {"future": True}
    url = make_url(db_url)
    if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
        # One shared connection, otherwise every thread sees its own empty database
        kwargs.update(poolclass=StaticPool, connect_args={"check_same_thread": False})
    engine = create_engine(db_url, **kwargs)
    Base.metadata.create_all(engine)
    return engine


class JobStore:
    """Row store for listings and scrape logs, keyed by `original_url` for listings."""

    def __init__(self, db_url: str):
        self.engine = init_engine(db_url)
        self._Session = sessionmaker(bind=self.engine, expire_on_commit=False)

    @contextmanager
    def get_session(self):
        sess = self._Session()
        try:
            yield sess
            sess.commit()
        except Exception:
            sess.rollback()
            raise
        finally:
            sess.close()

    def upsert_listings(self, listings: Sequence[JobListing]) -> int:
        with self.get_session() as s:
            for listing in listings:
                upsert_job(s, listing)
        return len(listings)

    def get_listing_by_url(self, url: str) -> Optional[JobListing]:
        with self.get_session() as s:
            row = s.query(JobListingRow).filter(JobListingRow.original_url == url).one_or_none()
            return JobListing.model_validate(row) if row else None

    def count_listings(self) -> int:
        with self.get_session() as s:
            return s.query(JobListingRow).count()

    def query_listings(
        self,
        offset: int,
        limit: int,
        keywords: Optional[str] = None,
        location: Optional[str] = None,
        job_type: Optional[str] = None,
    ) -> tuple[list[JobListing], int]:
        """Newest-first page of listings plus the total number of matches."""
        with self.get_session() as s:
            q = s.query(JobListingRow)
            if keywords:
                pattern = _contains(keywords)
                q = q.filter(or_(
                    JobListingRow.job_title.ilike(pattern, escape="\\"),
                    JobListingRow.description.ilike(pattern, escape="\\"),
                ))
            if location:
                q = q.filter(JobListingRow.location.ilike(_contains(location), escape="\\"))
            if job_type:
                q = q.filter(JobListingRow.job_type == job_type)

            total = q.count()
            rows = (
                q.order_by(JobListingRow.created_at.desc(), JobListingRow.id.desc())
                .offset(offset)
                .limit(limit)
                .all()
            )
            return [JobListing.model_validate(r) for r in rows], total

    def insert_scrape_log(self, log: ScrapeLog) -> ScrapeLog:
        with self.get_session() as s:
            row = ScrapeLogRow(**log.model_dump(exclude={"id", "created_at"}))
            s.add(row)
            s.flush()
            return ScrapeLog.model_validate(row)

    def list_scrape_logs(self) -> list[ScrapeLog]:
        with self.get_session() as s:
            rows = s.query(ScrapeLogRow).order_by(ScrapeLogRow.id).all()
            return [ScrapeLog.model_validate(r) for r in rows]


def _contains(text: str) -> str:
    # User input is matched literally: LIKE wildcards are escaped
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def upsert_job(sess, listing: JobListing):
    # Last write wins: every column is replaced with the incoming values
    values = listing.storage_fields()
    if values.get("scraped_at") is None:
        values.pop("scraped_at")

    existing = (
        sess.query(JobListingRow)
        .filter(JobListingRow.original_url == listing.original_url)
        .one_or_none()
    )

    if existing:
        for column, value in values.items():
            setattr(existing, column, value)
        return existing

    row = JobListingRow(**values)
    sess.add(row)
    return row
