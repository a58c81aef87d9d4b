"""
Household Ledger FastAPI application.

This is the entry point for the application.
All routers are registered here.
"""

import uvicorn
from fastapi import FastAPI

from household_ledger.config import get_settings
from household_ledger.logging_config import configure_logging
from household_ledger.api.health import router as health_router
from household_ledger.api.households import router as households_router
from household_ledger.api.ledger import router as ledger_router
from household_ledger.api.kpi import router as kpi_router

settings = get_settings()
configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Double-entry ledger and KPIs for household finances",
)

# Register routers
app.include_router(health_router)
app.include_router(households_router)
app.include_router(ledger_router)
app.include_router(kpi_router)


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run(
        "household_ledger.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
