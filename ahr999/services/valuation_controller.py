"""
Presentation boundary.

The presenter only ever sees a MetricsResult or an (ErrorKind, message)
pair; it holds all rendering state itself.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from ahr999.core.errors import ErrorKind, ValuationError
from ahr999.domain.models import MetricsResult
from ahr999.services.valuation_service import ValuationService

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Unexpected error while calculating. Please try again later."


class ValuationPresenter(Protocol):
    def on_result(self, result: MetricsResult) -> None:
        ...

    def on_error(self, kind: ErrorKind, message: str) -> None:
        ...


class ValuationController:
    def __init__(self, service: ValuationService, presenter: ValuationPresenter):
        self.service = service
        self.presenter = presenter

    async def on_calculate_requested(self, base_amount: Any) -> None:
        """Run one calculation and report exactly once to the presenter."""
        try:
            result = await self.service.calculate(base_amount)
        except ValuationError as exc:
            logger.warning(f"Calculation failed ({exc.kind.value}): {exc}")
            self.presenter.on_error(exc.kind, str(exc))
            return
        except Exception:
            logger.exception("Calculation error")
            self.presenter.on_error(ErrorKind.INTERNAL, INTERNAL_ERROR_MESSAGE)
            return

        self.presenter.on_result(result)
