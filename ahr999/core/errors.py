"""
Error hierarchy for the valuation pipeline.

Only ValuationError subclasses reach the presenter. ProviderError is
raised by a single market data provider and is absorbed by the fallback
chain or the historical fallback.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Category reported to the presenter"""
    INVALID_INPUT = "InvalidInput"
    DATA_UNAVAILABLE = "DataUnavailable"
    COMPUTATION_ERROR = "ComputationError"
    INTERNAL = "Internal"


class ValuationError(Exception):
    """Base class for errors surfaced to the presenter."""

    kind: ErrorKind = ErrorKind.INTERNAL


class InvalidInput(ValuationError):
    """Base investment is not a positive finite number."""

    kind = ErrorKind.INVALID_INPUT


class DataUnavailable(ValuationError):
    """Every current price provider failed."""

    kind = ErrorKind.DATA_UNAVAILABLE

    def __init__(self, message: str = "Failed to load market data. Please try again later."):
        super().__init__(message)


class ComputationError(ValuationError):
    """A metric could not be computed from its inputs."""

    kind = ErrorKind.COMPUTATION_ERROR


class EmptySeries(ComputationError):
    """An average was requested over an empty price series."""

    def __init__(self, message: str = "Price series is empty"):
        super().__init__(message)


class ProviderError(Exception):
    """A single market data provider attempt failed."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"{provider}: {message}")
