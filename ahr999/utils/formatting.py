"""Display formatting for valuation results."""

from datetime import datetime, timezone
from typing import Optional


def format_currency(value: float) -> str:
    return f"${value:.2f}"


def format_index(value: float) -> str:
    return f"{value:.2f}"


def utc_now_iso(now: Optional[datetime] = None) -> str:
    """Current time as an ISO-8601 UTC string (seconds precision)."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).replace(microsecond=0).isoformat()
