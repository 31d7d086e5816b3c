"""SiteAudit API – FastAPI app exposing the website audit pipeline."""

import logging
from urllib.parse import urlparse

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ai_service import synthesize_report
from config import CORS_ALLOW_ORIGINS, LOG_LEVEL
from errors import AuditError, ValidationError
from providers import ProviderClients
from schemas import AuditRequest, ErrorResponse
from scraper import extract_signals

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="SiteAudit API",
    description="AI website audit report generator",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Completion clients are built on first use and shared by all requests.
app.state.provider_clients = ProviderClients()


def get_provider_clients(request: Request) -> ProviderClients:
    return request.app.state.provider_clients


def normalize_url(url: str) -> str:
    """Prefix scheme-less input with https://."""
    if not url.startswith(("http://", "https://")):
        return f"https://{url}"
    return url


def is_valid_url(url: str) -> bool:
    """True for a well-formed absolute http(s) URL with a host."""
    try:
        parsed = urlparse(url)
        parsed.port  # raises ValueError on a malformed port
    except ValueError:
        return False
    if parsed.scheme not in {"http", "https"}:
        return False
    host = parsed.hostname or ""
    return bool(host) and not any(ch.isspace() for ch in parsed.netloc)


@app.exception_handler(AuditError)
async def handle_audit_error(request: Request, exc: AuditError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Audit error on %s: %s", request.url.path, exc.message)
    else:
        logger.warning("Rejected request on %s: %s", request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Malformed request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error="URL is required").model_dump(),
    )


@app.post(
    "/api/audit",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def audit(
    body: AuditRequest,
    clients: ProviderClients = Depends(get_provider_clients),
) -> JSONResponse:
    """
    Pipeline: validate url -> scrape homepage -> AI report -> return report.
    """
    if not body.url:
        raise ValidationError("URL is required")

    normalized_url = normalize_url(body.url)
    if not is_valid_url(normalized_url):
        raise ValidationError("Invalid URL format")

    try:
        signals = extract_signals(normalized_url)
        report = synthesize_report(signals, clients=clients)
    except AuditError:
        raise
    except Exception as exc:
        logger.exception("Audit failed for %s", normalized_url)
        raise AuditError(str(exc) or "Failed to generate audit") from exc

    return JSONResponse(content=report)


@app.get("/health")
def health() -> dict:
    """Health check for deployment."""
    return {"status": "ok"}
