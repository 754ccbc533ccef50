"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recruit_crm.api.errors import register_exception_handlers
from recruit_crm.api.limiter import limiter
from recruit_crm.config import settings
from recruit_crm.db.base import init_db
from recruit_crm.logging_config import configure_logging

logger = logging.getLogger(__name__)

ALLOWED_ORIGINS = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and initialize database on startup."""
    configure_logging()
    try:
        init_db()
    except ValueError:
        logger.warning("DATABASE_URL not set, skipping table creation")
    yield


app = FastAPI(
    title="Recruit CRM API",
    description="Companies, contacts and their contact methods",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


# Import and include routers
from recruit_crm.api.routes import companies, contacts, field_definitions  # noqa: E402

app.include_router(companies.router, prefix=f"{settings.api_prefix}/companies", tags=["Companies"])
app.include_router(contacts.router, prefix=f"{settings.api_prefix}/contacts", tags=["Contacts"])
app.include_router(
    field_definitions.router, prefix=f"{settings.api_prefix}/field-definitions", tags=["Field Definitions"]
)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
