"""First payment start policy value object"""

from enum import StrEnum
from typing import Any


class FirstPaymentStart(StrEnum):
    """When the first payment of a term falls due"""

    START_WITH_TERM = "Start with Term"
    NEXT_JAN_1 = "Start next Jan 1 after Term commencement"
    FIRST_OF_NEXT_MONTH = "Start 1st of month after commencement"
    DEFAULT = "Default"

    @classmethod
    def parse(cls, value: Any) -> "FirstPaymentStart":
        """Map a raw fact value onto a policy, DEFAULT when it is missing or unknown"""
        if isinstance(value, FirstPaymentStart):
            return value
        for member in cls:
            if member.value == value:
                return member
        return cls.DEFAULT
