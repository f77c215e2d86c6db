"""
FastAPI Main Application
AHR999 valuation index and DCA recommendation service
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ahr999 import __version__
from ahr999.api.routes import market_data, valuation
from ahr999.config import settings
from ahr999.core.logging import setup_logging
from ahr999.infrastructure.market_data.provider_factory import (
    get_historical_source,
    get_price_provider,
)
from ahr999.services.valuation_service import ValuationService

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def build_valuation_service() -> ValuationService:
    price_source = get_price_provider()
    return ValuationService(
        price_source=price_source,
        historical_source=get_historical_source(price_source),
        history_days=settings.HISTORY_DAYS,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Wires the market data chain into the valuation service
    """
    logger.info("=" * 60)
    logger.info("🚀 Starting AHR999 DCA Assistant")
    logger.info("=" * 60)

    service = build_valuation_service()
    app.state.valuation_service = service
    logger.info(f"   📈 Price providers: {', '.join(service.price_source.names)}")
    logger.info(f"   📊 History window: {service.history_days} days")
    logger.info(f"   ✅ API Server: http://{settings.API_HOST}:{settings.API_PORT}")

    yield

    logger.info("👋 AHR999 DCA Assistant shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="AHR999 DCA Assistant",
    description="Bitcoin AHR999 valuation index with DCA sizing",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(valuation.router, prefix="/api/v1/ahr999", tags=["Valuation"])
app.include_router(market_data.router, prefix="/api/v1/market-data", tags=["Market Data"])


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": "AHR999 DCA Assistant",
        "version": __version__,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ahr999.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
