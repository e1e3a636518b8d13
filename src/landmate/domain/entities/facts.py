"""
Typed fact coercion for extracted document attributes.

The extraction layer delivers facts as "string", "date", "number" or "bool"
values that are frequently missing or malformed. These annotated types
normalise them permissively: unparseable numbers become None, missing flags
become False and dates accept ISO or US formatted text.
"""

import math
from datetime import date, datetime
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator

from landmate.domain.value_objects import FirstPaymentStart, PaymentFrequency

_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%Y/%m/%d", "%m-%d-%Y")


def to_number(value: Any) -> Optional[float]:
    """Coerce a number fact, returning None for missing, NaN or unparseable values"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return None if math.isnan(value) else float(value)
    if isinstance(value, str):
        cleaned = value.strip().replace(",", "").replace("$", "").rstrip("%")
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
        return None if math.isnan(number) else number
    return None


def to_flag(value: Any) -> bool:
    """Coerce a bool fact, missing values are False"""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "y", "1")
    return bool(value)


def to_date(value: Any) -> Optional[date]:
    """Coerce a date fact from a date, datetime or formatted string"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
        for fmt in _DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
    return None


def to_ordinal(value: Any) -> int:
    number = to_number(value)
    return int(number) if number is not None else 0


def to_optional_frequency(value: Any) -> Optional[PaymentFrequency]:
    if value is None or value == "":
        return None
    return PaymentFrequency.parse(value)


def to_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def num(value: Optional[float]) -> float:
    """Missing numeric facts count as zero"""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return 0.0
    return value


Number = Annotated[Optional[float], BeforeValidator(to_number)]
Flag = Annotated[bool, BeforeValidator(to_flag)]
FactDate = Annotated[Optional[date], BeforeValidator(to_date)]
Text = Annotated[Optional[str], BeforeValidator(to_text)]
Ordinal = Annotated[int, BeforeValidator(to_ordinal)]
Frequency = Annotated[PaymentFrequency, BeforeValidator(PaymentFrequency.parse)]
OptionalFrequency = Annotated[Optional[PaymentFrequency], BeforeValidator(to_optional_frequency)]
FirstPaymentPolicy = Annotated[FirstPaymentStart, BeforeValidator(FirstPaymentStart.parse)]
