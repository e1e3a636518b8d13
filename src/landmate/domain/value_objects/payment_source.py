"""Payment source value object"""

from enum import StrEnum


class PaymentSource(StrEnum):
    """Origin of a generated payment event"""

    TERM_MODEL = "Term Model"
    DATE_MODEL = "Date Model"
    DATE_MODEL_ONE_TIME = "Date Model (One Time)"
    PURCHASE_PRICE = "Purchase Price Calculation"
