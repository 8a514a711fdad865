"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the portfolio service.
Controllers are intentionally thin: they accept requests, delegate to
`PortfolioService`, and wrap results in the response envelope. Errors
raised by the service are turned into error envelopes by the handlers in
`errors.py`.

Endpoints implemented:
- GET /api/v1/portfolios/{id}
- POST /api/v1/portfolios
- PUT /api/v1/portfolios/{id}
- GET /api/v1/portfolios?userId=
- DELETE /api/v1/portfolios/{id}
- GET /health
"""

from fastapi import FastAPI, APIRouter, Depends, Query, Request
from fastapi.responses import Response
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session
import json
import logging
import time
import uuid
from .database import create_db_and_tables, get_session
from .audit import AuditLogger
from .errors import register_exception_handlers
from .repositories import PortfolioRepository
from .responses import REQUEST_ID_HEADER, request_id_for, success_response
from .schemas import PortfolioCreateRequest, PortfolioListResponse, PortfolioResponse
from .services import PortfolioService
from .validation import ValidationFramework
from .config import settings

API_PREFIX = "/api/v1/portfolios"

app = FastAPI(title="Portfolio Service API")
logger = logging.getLogger("portfolio_api.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)
create_db_and_tables()


def _request_log_line(request: Request, started: float, status_code: int) -> str:
    return json.dumps(
        {
            "request_id": request.state.request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
        },
        ensure_ascii=True,
    )


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """Assign the request id and log one line per request.

    A blank `X-Request-ID` header counts as absent. Unhandled errors are
    rendered (with the header) by the 500 handler in `errors.py`, so this
    only records the failure before re-raising.
    """
    request.state.request_id = request.headers.get(REQUEST_ID_HEADER, "").strip() or uuid.uuid4().hex
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.error("request_failed %s", _request_log_line(request, started, 500))
        raise
    response.headers[REQUEST_ID_HEADER] = request.state.request_id
    logger.info("request_done %s", _request_log_line(request, started, response.status_code))
    return response


def get_portfolio_service(request: Request, db: Session = Depends(get_session)) -> PortfolioService:
    """Build a `PortfolioService` bound to the request's session and id."""
    return PortfolioService(
        PortfolioRepository(db),
        ValidationFramework(),
        AuditLogger(db, request_id=request_id_for(request)),
    )


router = APIRouter(prefix=API_PREFIX, tags=["portfolios"])


@router.get('/{portfolio_id}', response_model=PortfolioResponse, responses={404: {"description": "Portfolio not found"}})
def get_portfolio(portfolio_id: int, request: Request, svc: PortfolioService = Depends(get_portfolio_service)):
    """Retrieve a portfolio by id."""
    logger.info("REST: GET /portfolios/%s", portfolio_id)
    portfolio = svc.find_by_id(portfolio_id)
    logger.debug("Successfully retrieved portfolio id=%s", portfolio_id)
    return success_response(request, portfolio)


@router.post('', status_code=201, response_model=PortfolioResponse, responses={400: {"description": "Invalid request"}})
def create_portfolio(payload: PortfolioCreateRequest, request: Request, svc: PortfolioService = Depends(get_portfolio_service)):
    """Create a new portfolio.

    Responds 201 with the created portfolio and a `Location` header
    pointing at the new resource.
    """
    logger.info("REST: POST /portfolios - Creating new portfolio for user: %s", payload.user_id)
    created = svc.create(payload)
    logger.info("Successfully created portfolio id=%s user_id=%s", created.id, payload.user_id)
    return success_response(
        request,
        created,
        status_code=201,
        headers={"Location": f"{API_PREFIX}/{created.id}"},
    )


@router.put('/{portfolio_id}', response_model=PortfolioResponse, responses={404: {"description": "Portfolio not found"}})
def update_portfolio(portfolio_id: int, payload: PortfolioCreateRequest, request: Request, svc: PortfolioService = Depends(get_portfolio_service)):
    """Update name and risk profile of an existing portfolio."""
    logger.info("REST: PUT /portfolios/%s - Updating portfolio", portfolio_id)
    updated = svc.update(portfolio_id, payload)
    logger.info("Successfully updated portfolio id=%s", portfolio_id)
    return success_response(request, updated)


@router.get('', response_model=PortfolioListResponse)
def list_portfolios(request: Request, user_id: int = Query(..., alias="userId"), svc: PortfolioService = Depends(get_portfolio_service)):
    """List all portfolios owned by `userId`."""
    logger.info("REST: GET /portfolios - Listing portfolios for user: %s", user_id)
    portfolios = svc.find_by_user_id(user_id)
    logger.debug("Retrieved %s portfolios for user %s", len(portfolios), user_id)
    return success_response(request, portfolios)


@router.delete('/{portfolio_id}', status_code=204, response_class=Response, responses={404: {"description": "Portfolio not found"}})
def delete_portfolio(portfolio_id: int, svc: PortfolioService = Depends(get_portfolio_service)):
    """Delete a portfolio; responds 204 with an empty body."""
    logger.info("REST: DELETE /portfolios/%s", portfolio_id)
    svc.delete(portfolio_id)
    logger.info("Successfully deleted portfolio id=%s", portfolio_id)
    return Response(status_code=204)


app.include_router(router)


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}
