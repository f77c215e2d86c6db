"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    # Enums
    ValuationBand,

    # Entities
    MetricsResult,
    PriceSeries,
)

__all__ = [
    # Enums
    "ValuationBand",

    # Entities
    "MetricsResult",
    "PriceSeries",
]
