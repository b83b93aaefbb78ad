import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from alphacard.api.routes.advisor import router as advisor_router
from alphacard.api.routes.cards import router as cards_router
from alphacard.api.routes.health import router as health_router
from alphacard.api.routes.recommend import router as recommend_router
from alphacard.api.routes.rewards import router as rewards_router
from alphacard.api.routes.transactions import router as transactions_router
from alphacard.config import settings
from alphacard.log import configure_logging

logger = logging.getLogger(__name__)

app = FastAPI(title="AlphaCard API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)
app.include_router(health_router)
# /cards/efficiency must match before /cards/{card_id}
app.include_router(recommend_router)
app.include_router(cards_router)
app.include_router(transactions_router)
app.include_router(rewards_router)
app.include_router(advisor_router)


@app.exception_handler(HTTPException)
async def http_error(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(Exception)
async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


def run() -> None:
    configure_logging(settings.log_level)
    uvicorn.run("alphacard.api.app:app", host=settings.app_host, port=settings.app_port, reload=False)
