"""Due-date projection — pure functions for the next oil change.

Both projections are total over valid inputs and carry no state, so the
same inputs always give the same result.
"""

from datetime import date

from dateutil.relativedelta import relativedelta

DEFAULT_INTERVAL_KM = 10000
DEFAULT_INTERVAL_MONTHS = 3


def project_next_date(service_date: date, interval_months: int) -> date:
    """Return ``service_date`` plus ``interval_months`` calendar months.

    The day of month is kept when the target month has it and clamped to
    the last day otherwise (e.g. Jan 31 + 1 month → Feb 28/29).
    """
    if interval_months <= 0:
        raise ValueError("interval_months must be a positive integer")
    return service_date + relativedelta(months=interval_months)


def project_next_odometer(current_km: int, interval_km: int = DEFAULT_INTERVAL_KM) -> int:
    """Return the odometer reading at which the next change is due."""
    if current_km < 0:
        raise ValueError("current_km cannot be negative")
    if interval_km <= 0:
        raise ValueError("interval_km must be a positive integer")
    return current_km + interval_km
