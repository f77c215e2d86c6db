from fastapi import Request

from ahr999.services.valuation_service import ValuationService


def get_valuation_service(request: Request) -> ValuationService:
    return request.app.state.valuation_service
