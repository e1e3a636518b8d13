"""Payment frequency value object"""

from enum import StrEnum
from typing import Any, Optional


class PaymentFrequency(StrEnum):
    """Enumeration for payment and escalation cadences"""

    ANNUALLY = "Annually"
    SEMIANNUALLY = "Semiannually"
    QUARTERLY = "Quarterly"
    MONTHLY = "Monthly"
    ONCE_PER_TERM = "Once per Term"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> "PaymentFrequency":
        """Map a raw fact value onto a frequency, UNKNOWN when it is not recognised"""
        if isinstance(value, PaymentFrequency):
            return value
        for member in cls:
            if member is not cls.UNKNOWN and member.value == value:
                return member
        return cls.UNKNOWN

    @property
    def months(self) -> Optional[int]:
        """Calendar months covered by one period, None when not calendar based"""
        return _MONTHS.get(self)

    @property
    def periods_per_year(self) -> Optional[int]:
        """Ratio factor used to reconcile payment and escalation cadences"""
        return _PERIODS_PER_YEAR.get(self)

    def is_recognized(self) -> bool:
        """Check if the frequency can drive a schedule"""
        return self != PaymentFrequency.UNKNOWN


_MONTHS = {
    PaymentFrequency.ANNUALLY: 12,
    PaymentFrequency.SEMIANNUALLY: 6,
    PaymentFrequency.QUARTERLY: 3,
    PaymentFrequency.MONTHLY: 1,
}

_PERIODS_PER_YEAR = {
    PaymentFrequency.ANNUALLY: 1,
    PaymentFrequency.SEMIANNUALLY: 2,
    PaymentFrequency.QUARTERLY: 4,
    PaymentFrequency.MONTHLY: 12,
}
