import asyncio
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from jobfinder.errors import JobFinderError, QueryValidationError, SearchValidationError
from jobfinder.log import get_logger
from jobfinder.models.search import SearchRequest
from jobfinder.pipeline.orchestrator import Aggregator
from jobfinder.pipeline.query import list_jobs
from jobfinder.pipeline.storage import JobStore
from jobfinder.settings import Settings, settings as default_settings

log = get_logger(__name__)

CORS_METHODS = ["POST", "GET", "OPTIONS", "PUT", "DELETE"]
CORS_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


def _to_int(name: str, raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        raise QueryValidationError(f"{name} must be an integer") from None


def create_app(
    settings: Settings = default_settings,
    store: Optional[JobStore] = None,
    aggregator: Optional[Aggregator] = None,
) -> FastAPI:
    store = store or JobStore(settings.DB_URL)
    aggregator = aggregator or Aggregator(store, settings=settings)

    app = FastAPI(title="jobfinder")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )
    app.state.store = store
    app.state.aggregator = aggregator

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return JSONResponse({"success": False, "error": message}, status_code=400)

    @app.post("/scrape-jobs")
    async def scrape_jobs(body: SearchRequest):
        try:
            result = await aggregator.run(body.keywords, body.platforms, body.filters, user_id=body.user_id)
        except SearchValidationError as e:
            return JSONResponse({"success": False, "error": str(e)}, status_code=400)
        except Exception:
            log.exception("Scrape error")
            return JSONResponse({"success": False, "error": "Internal server error"}, status_code=500)
        return result.to_response()

    @app.get("/get-jobs")
    async def get_jobs(
        page: str = "1",
        limit: Optional[str] = None,
        keywords: Optional[str] = None,
        location: Optional[str] = None,
        job_type: Optional[str] = None,
    ):
        try:
            result = await asyncio.to_thread(
                list_jobs,
                store,
                page=_to_int("page", page),
                limit=_to_int("limit", limit),
                keywords=keywords,
                location=location,
                job_type=job_type,
                settings=settings,
            )
        except (JobFinderError, SQLAlchemyError) as e:
            return JSONResponse({"error": str(e)}, status_code=400)
        return result.to_response()

    return app
