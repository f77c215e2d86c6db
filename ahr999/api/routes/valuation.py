"""
Valuation API Routes
AHR999 index and DCA recommendation
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ahr999.api.dependencies import get_valuation_service
from ahr999.config import settings
from ahr999.core.errors import ErrorKind
from ahr999.domain.models import MetricsResult
from ahr999.services.valuation_controller import ValuationController
from ahr999.services.valuation_service import ValuationService
from ahr999.utils.formatting import format_currency, format_index, utc_now_iso

router = APIRouter()

ERROR_STATUS = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.DATA_UNAVAILABLE: 503,
    ErrorKind.COMPUTATION_ERROR: 500,
    ErrorKind.INTERNAL: 500,
}


# Response models
class DisplayValues(BaseModel):
    current_price: str
    dca_cost: str
    growth_estimate: str
    ahr999: str
    recommended_investment: str


class ValuationResponse(BaseModel):
    current_price: float
    dca_cost: float
    growth_estimate: float
    ahr999: float
    recommended_investment: float
    band: str
    coin_age_days: int
    base_investment: float
    price_source: Optional[str]
    historical_synthetic: Optional[bool]
    calculated_at: str
    display: DisplayValues


class JsonPresenter:
    """Collects the controller callback for an HTTP response."""

    def __init__(self):
        self.result: Optional[MetricsResult] = None
        self.error: Optional[tuple[ErrorKind, str]] = None

    def on_result(self, result: MetricsResult) -> None:
        self.result = result

    def on_error(self, kind: ErrorKind, message: str) -> None:
        self.error = (kind, message)


@router.get("", response_model=ValuationResponse)
async def calculate_valuation(
    base_investment: Optional[str] = Query(None, description="Base DCA amount in USD"),
    service: ValuationService = Depends(get_valuation_service),
):
    """Fetch market data and compute the AHR999 recommendation."""
    raw_amount = base_investment if base_investment is not None else settings.DEFAULT_BASE_INVESTMENT

    presenter = JsonPresenter()
    await ValuationController(service, presenter).on_calculate_requested(raw_amount)

    if presenter.error is not None:
        kind, message = presenter.error
        raise HTTPException(
            status_code=ERROR_STATUS.get(kind, 500),
            detail={"kind": kind.value, "message": message},
        )

    result = presenter.result
    return ValuationResponse(
        **result.to_dict(),
        price_source=service.last_price_source,
        historical_synthetic=service.last_history_synthetic,
        calculated_at=utc_now_iso(),
        display=DisplayValues(
            current_price=format_currency(result.current_price),
            dca_cost=format_currency(result.dca_cost),
            growth_estimate=format_currency(result.growth_estimate),
            ahr999=format_index(result.ahr999),
            recommended_investment=format_currency(result.recommended_investment),
        ),
    )
