import httpx
from jobfinder.settings import Settings, settings as default_settings


def default_headers(settings: Settings = default_settings) -> dict[str, str]:
    return {
        "User-Agent": settings.USER_AGENT,
        "Accept": settings.ACCEPT,
        "Accept-Language": settings.ACCEPT_LANGUAGE,
    }


def get_client(settings: Settings = default_settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers=default_headers(settings),
        timeout=settings.REQUEST_TIMEOUT,
        follow_redirects=True,
    )
