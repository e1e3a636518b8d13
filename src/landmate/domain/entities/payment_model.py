"""Payment model domain entities"""

from typing import Optional
from pydantic import BaseModel, ConfigDict

from landmate.domain.entities.facts import (
    FactDate,
    Flag,
    Frequency,
    Number,
    OptionalFrequency,
    Text,
)
from landmate.domain.value_objects import PaymentFrequency


class TermPaymentModel(BaseModel):
    """
    Periodic payment model anchored to agreement terms.

    `model_type` is matched against a term's `payment_model` (or its
    `term_type` when the term names no model). Rates are percentages.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Text = None
    model_type: Text = None
    payment_frequency: Frequency = PaymentFrequency.UNKNOWN

    minimum_payment: Number = None
    payment_per_mw: Number = None
    payment_per_mva: Number = None
    flat_payment_amount: Number = None
    payment_per_acre: Number = None

    periodic_escalation_rate: Number = None
    periodic_escalation_frequency: OptionalFrequency = None
    increase_amount: Number = None

    prorated_first_period: Flag = False
    first_payment_lag: Number = None
    subsequent_payment_lag: Number = None
    apply_payment_lag_to_extension: Flag = False

    payee: Text = None
    applicable_to_purchase: Flag = False

    def uses_blended_escalation(self) -> bool:
        """Prorated first periods with periodic escalation need the blended schedule"""
        return bool(self.prorated_first_period and (self.periodic_escalation_rate or 0) > 0)


class DatePaymentModel(BaseModel):
    """
    Payment model anchored to absolute calendar dates.

    Either a single `date_one_time` payment or a recurring window from
    `date_begin` to `date_end` at `frequency`.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Text = None
    payment_type: Text = None
    date_one_time: FactDate = None
    date_begin: FactDate = None
    date_end: FactDate = None
    frequency: OptionalFrequency = None

    payment_amount: Number = None
    increase_amount: Number = None
    periodic_escalation_rate: Number = None
    first_payment_lag: Number = None
    subsequent_payment_lag: Number = None

    payee: Text = None
    refundable: Flag = False
    applicable_to_purchase: Flag = False

    def is_one_time(self) -> bool:
        return self.date_one_time is not None

    def is_schedulable(self) -> bool:
        """A model needs a one-time date or a full recurring window, and an amount"""
        has_window = bool(self.date_begin and self.date_end and self.frequency)
        return (has_window or self.is_one_time()) and bool(self.payment_amount)
