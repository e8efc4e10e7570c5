from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import sys
import os

# Add the current directory to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import exceptions
from routes import base_routes
from core.invoices.controller.invoicecontroller import invoice_routes
from core.invoices.controller.draftcontroller import draft_routes
from core.analytics.controller.analyticscontroller import analytics_routes

from utilities.dbconfig import Base, engine
from utilities.dbmodels import missing_tables
from config import settings
from utilities.exceptions import DatabaseValidationError, FormValidationError
from fastapi.exceptions import RequestValidationError
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from loguru import logger
import logging
from contextlib import asynccontextmanager

logging.basicConfig(level=settings.LOG_LEVEL)


# Initialize FastAPI with lifespan event handler
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown"""
    # Startup
    logger.info("[APP_STARTUP] Application starting...")
    try:
        missing = missing_tables(inspect(engine))
        if missing:
            logger.warning(f"[DB_INIT] Missing tables {missing}, creating them (run alembic for managed databases)")
            Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.error(f"[DB_INIT_ERROR] Could not inspect the invoice store: {str(e)}")
    yield
    # Shutdown
    logger.info("[APP_SHUTDOWN] Application shutting down...")
    engine.dispose()


app = FastAPI(
    title=settings.SERVICE_NAME,
    version="1.0",
    description=f"""**{settings.BUSINESS_NAME} Invoicing API** Travel invoices deployed with python.

    Default Endpoints:
    - Invoice Draft (autosaved form state)
    - Invoices (create, edit, search, delete)
    - Invoice Documents, PDF export and WhatsApp sharing
    - Analytics
    """,
    contact={
        "name": "API Support",
        "email": settings.BUSINESS_EMAIL,
    },
    license_info={
        "name": "MIT",
    },
    lifespan=lifespan
)

# -----------------------------------------------------------
# Middleware (CORS)
# -----------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception Handlers

app.add_exception_handler(DatabaseValidationError, exceptions.database_validation_exception_handler)
app.add_exception_handler(FormValidationError, exceptions.form_validation_exception_handler)
app.add_exception_handler(RequestValidationError, exceptions.validation_exception_handler)
app.add_exception_handler(SQLAlchemyError, exceptions.store_exception_handler)

# Routes Registration

app.include_router(base_routes, prefix="/api/v1", tags=["Base Routes"])
app.include_router(draft_routes, prefix="/api/v1/draft", tags=["Draft Routes"])
app.include_router(invoice_routes, prefix="/api/v1/invoice", tags=["Invoice Routes"])
app.include_router(analytics_routes, prefix="/api/v1/analytics", tags=["Analytics Routes"])
