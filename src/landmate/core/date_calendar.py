"""
Date arithmetic abstraction injected into every schedule component.

`Calendar` fixes the operations the engine needs (add/subtract days, months
and years, fractional unit differences, formatting); `GregorianCalendar`
implements them with dateutil's relativedelta, which clamps month-end dates
(Jan 31 + 1 month = Feb 28/29).
"""

import math
from abc import ABC, abstractmethod
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta


class Calendar(ABC):
    """Date arithmetic used by term resolution and schedule generation"""

    @abstractmethod
    def add_days(self, value: date, days: int) -> date:
        raise NotImplementedError

    @abstractmethod
    def add_months(self, value: date, months: int) -> date:
        raise NotImplementedError

    @abstractmethod
    def add_years(self, value: date, years: int) -> date:
        raise NotImplementedError

    def add_fractional_years(self, value: date, years: float, days_per_year: float = 365.25) -> date:
        """
        Add a possibly fractional number of years.

        Whole years are calendar years; the fraction becomes days and a
        residual of half a day (noon) or more rounds up to the next day.
        """
        whole_years = int(years)
        result = self.add_years(value, whole_years)
        fractional_days = (years - whole_years) * days_per_year
        whole_days = math.floor(fractional_days)
        if fractional_days - whole_days >= 0.5:
            whole_days += 1
        return self.add_days(result, whole_days)

    def year_end(self, value: date) -> date:
        return date(value.year, 12, 31)

    def month_end(self, value: date) -> date:
        return self.add_days(self.add_months(date(value.year, value.month, 1), 1), -1)

    def diff_in_units(self, start: date, end: date, unit_months: int) -> float:
        """
        Fractional count of `unit_months`-long units from start to end.

        Whole units are stepped on the calendar; the remainder is the share of
        days of the following unit.
        """
        if end <= start:
            return 0.0
        whole = 0
        while self.add_months(start, unit_months * (whole + 1)) <= end:
            whole += 1
        unit_start = self.add_months(start, unit_months * whole)
        unit_end = self.add_months(start, unit_months * (whole + 1))
        return whole + (end - unit_start).days / (unit_end - unit_start).days

    def diff_in_years(self, start: date, end: date) -> float:
        return self.diff_in_units(start, end, 12)

    def format(self, value: date, fmt: str = "%m/%d/%Y") -> str:
        return value.strftime(fmt)


class GregorianCalendar(Calendar):
    """Proleptic Gregorian calendar backed by dateutil"""

    def add_days(self, value: date, days: int) -> date:
        return value + timedelta(days=days)

    def add_months(self, value: date, months: int) -> date:
        return value + relativedelta(months=months)

    def add_years(self, value: date, years: int) -> date:
        return value + relativedelta(years=years)


DEFAULT_CALENDAR = GregorianCalendar()
