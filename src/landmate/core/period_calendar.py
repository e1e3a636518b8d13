"""Payment period boundaries and prorata fractions per payment frequency."""

from datetime import date
from typing import Optional

from landmate.core.date_calendar import Calendar, DEFAULT_CALENDAR
from landmate.core.growth import round_to
from landmate.domain.value_objects import PaymentFrequency


def _prorated_period_end(start: date, frequency: PaymentFrequency, calendar: Calendar) -> Optional[date]:
    """Natural calendar boundary (year, half, quarter or month end) after start"""
    if frequency == PaymentFrequency.ANNUALLY:
        return calendar.year_end(start)
    if frequency in (PaymentFrequency.SEMIANNUALLY, PaymentFrequency.QUARTERLY, PaymentFrequency.MONTHLY):
        months = frequency.months
        boundary_month = ((start.month - 1) // months + 1) * months
        return calendar.month_end(date(start.year, boundary_month, 1))
    return None


def period_end(
    start: date,
    frequency: PaymentFrequency,
    prorated: bool,
    term_end: Optional[date],
    calendar: Calendar = DEFAULT_CALENDAR,
) -> Optional[date]:
    """
    End date of the payment period beginning at `start`.

    Pro-rated alignment ends on the natural calendar boundary; anniversary
    alignment ends one day before the next anniversary of `start`. "Once per
    Term" spans to the term end. The result never exceeds `term_end`; None is
    returned for an unrecognised frequency.
    """
    if frequency == PaymentFrequency.ONCE_PER_TERM:
        end = term_end
    elif not frequency.is_recognized():
        return None
    elif prorated:
        end = _prorated_period_end(start, frequency, calendar)
    else:
        end = calendar.add_days(calendar.add_months(start, frequency.months), -1)

    if end is None:
        return None
    if term_end is not None and end >= term_end:
        return term_end
    return end


def prorata_factor(
    period_start: date,
    period_end_date: date,
    frequency: PaymentFrequency,
    calendar: Calendar = DEFAULT_CALENDAR,
    precision: int = 4,
) -> float:
    """
    Fraction of a full payment period covered by [period_start, period_end_date].

    Frequencies without a calendar length ("Once per Term") count as a full period.
    """
    if frequency.months is None:
        return 1.0
    exclusive_end = calendar.add_days(period_end_date, 1)
    return round_to(calendar.diff_in_units(period_start, exclusive_end, frequency.months), precision)
