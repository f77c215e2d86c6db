"""
Market Data routes - provider status.
"""

from fastapi import APIRouter, Depends

from ahr999.api.dependencies import get_valuation_service
from ahr999.services.valuation_service import ValuationService

router = APIRouter()


@router.get("/status")
async def market_data_status(service: ValuationService = Depends(get_valuation_service)):
    """Return the provider chain and the sources used by the last calculation."""
    price_source = service.price_source
    historical = service.historical_source
    last_state = historical.last_state

    return {
        "price_providers": list(getattr(price_source, "names", [])),
        "historical_provider": historical.provider.name,
        "history_days": service.history_days,
        "last_price_source": getattr(price_source, "last_source", None),
        "last_historical_state": last_state.value if last_state else None,
    }
