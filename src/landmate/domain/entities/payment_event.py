"""Payment event domain entity"""

from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from landmate.domain.value_objects import PaymentSource


class PaymentEvent(BaseModel):
    """
    A single computed payment owed to one payee.

    Events are immutable once produced; every obligation instant yields one
    event per grantor, each carrying that grantor's share of the total.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    payment_source: PaymentSource
    model_id: Optional[str] = None
    project_id: Optional[str] = None
    payment_index: int = 0
    payment_date: date
    late_payment_date: Optional[date] = None
    payment_type: Optional[str] = None
    payment_amount: float = 0.0
    payee: Optional[str] = None
    payment_period_start: Optional[date] = None
    payment_period_end: Optional[date] = None
    prorata_factor: Optional[float] = None
    applicable_to_purchase: bool = False
    refundable: bool = False
    after_outside_date: bool = False
    previous_periods: Optional[float] = Field(
        default=None, description="Elapsed escalation periods used for the amount"
    )

    @property
    def due_date(self) -> date:
        """Date the payment is actually due, accounting for payment lag"""
        return self.late_payment_date or self.payment_date
