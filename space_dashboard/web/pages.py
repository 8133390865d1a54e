"""
HTML pages: dashboard, ISS, OSDR and slug-addressed CMS pages.

Pages never fail because an upstream is down: collector errors are logged
and the page renders with "no data".
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from space_dashboard.config.settings import Settings
from space_dashboard.core.exceptions import UpstreamError
from space_dashboard.database import repositories
from space_dashboard.space_logging import get_logger
from space_dashboard.web.upstream import TelemetryClient, get_telemetry_client, get_web_settings, safe_http_url

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

MAX_SLUG_LEN = 255

router = APIRouter(tags=["pages"])


def _fail_soft(name: str, call: Callable[[], Any], default: Any) -> Any:
    try:
        return call()
    except UpstreamError as e:
        logger.warning("page_upstream_unavailable", upstream_call=name, service=e.service, error=e.message)
        return default


def _iss_sample(data: Any) -> dict[str, Any] | None:
    """Collector /last answer, or None when it holds no sample."""
    if isinstance(data, dict) and isinstance(data.get("payload"), dict):
        return data
    return None


def _rest_url(item: dict[str, Any]) -> str | None:
    """Dataset REST_URL from the raw upstream record, http(s) only."""
    raw = item.get("raw")
    return safe_http_url(raw.get("REST_URL")) if isinstance(raw, dict) else None


@router.get("/", include_in_schema=False)
def root() -> RedirectResponse:
    return RedirectResponse(url="/dashboard", status_code=302)


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(request: Request, client: TelemetryClient = Depends(get_telemetry_client)) -> HTMLResponse:
    last = _iss_sample(_fail_soft("iss_last", client.last, None))
    return templates.TemplateResponse(request, "dashboard.html", {"iss": last})


@router.get("/iss", response_class=HTMLResponse)
def iss(request: Request, client: TelemetryClient = Depends(get_telemetry_client)) -> HTMLResponse:
    last = _iss_sample(_fail_soft("iss_last", client.last, None))
    trend = _fail_soft("iss_trend", client.trend, None)
    return templates.TemplateResponse(request, "iss.html", {"iss": last, "trend": trend})


@router.get("/osdr", response_class=HTMLResponse)
def osdr(
    request: Request,
    client: TelemetryClient = Depends(get_telemetry_client),
    settings: Settings = Depends(get_web_settings),
) -> HTMLResponse:
    items = _fail_soft("osdr_list", lambda: client.osdr_list(settings.osdr_list_limit), [])
    rows = [{**item, "rest_url": _rest_url(item)} for item in items if isinstance(item, dict)]
    return templates.TemplateResponse(request, "osdr.html", {"items": rows})


@router.get("/page/{slug:path}", response_class=HTMLResponse)
def cms_page(request: Request, slug: str) -> HTMLResponse:
    """CMS page by slug; 404 page for unknown, empty or over-long slugs."""
    key = repositories.normalize_slug(slug)
    page = None
    if key and len(key) <= MAX_SLUG_LEN:
        page = repositories.get_page(key)
    if page is None:
        logger.info("cms_page_not_found", slug=key[:64])
        return templates.TemplateResponse(request, "not_found.html", {"slug": key}, status_code=404)
    return templates.TemplateResponse(request, "page.html", {"page": page})
