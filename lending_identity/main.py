"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lending_identity.config import settings
from lending_identity.database import create_db_and_tables
from lending_identity.services.errors import AuthError
from lending_identity.utils.logging import setup_logging
from lending_identity.api import auth, wallet_auth, users, audit_logs, loans, credit_score, system

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    setup_logging()
    create_db_and_tables()
    yield


app = FastAPI(
    title="Lending Identity",
    description="Accounts, wallet two-factor login and lending records",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError):
    logger.info(f"{request.method} {request.url.path} -> {exc.kind.value} {exc.context}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.kind.value, "message": exc.message},
    )


# Mount routers
app.include_router(auth.router)
app.include_router(wallet_auth.router)
app.include_router(users.router)
app.include_router(audit_logs.router)
app.include_router(loans.router)
app.include_router(credit_score.router)
app.include_router(system.router)
