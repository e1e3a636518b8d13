"""Agreement term domain entity"""

from datetime import date
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from landmate.domain.entities.facts import (
    FactDate,
    FirstPaymentPolicy,
    Flag,
    Number,
    Ordinal,
    Text,
)
from landmate.domain.entities.payment_event import PaymentEvent
from landmate.domain.value_objects import FirstPaymentStart


class AgreementTerm(BaseModel):
    """
    One sequential term of an agreement.

    The declarative fields come from the document; the computed fields are
    filled by term resolution and schedule generation, each returning a new
    copy rather than mutating the source record.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Text = None
    term_ordinal: Ordinal = 0
    term_type: Text = None
    extension: Flag = False
    term_length_years: Number = None
    payment_model: Text = None
    first_payment_start: FirstPaymentPolicy = FirstPaymentStart.DEFAULT
    first_payment_date: FactDate = None
    escalation_rate: Number = None
    increase_amount: Number = None

    # Computed
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    start_date_text: Optional[str] = None
    end_date_text: Optional[str] = None
    cancelled_by_ops: bool = False
    cancelled_by_termination: bool = False
    cumulative_increase_amount: float = 0.0
    cumulative_escalation_rate: float = 1.0
    periodic_payments: List[PaymentEvent] = Field(default_factory=list)

    @property
    def model_key(self) -> Optional[str]:
        """Name used to look up the term's payment model"""
        return self.payment_model or self.term_type

    @property
    def payment_type(self) -> str:
        """Label carried by payment events generated for this term"""
        suffix = " (ext)" if self.extension else ""
        return f"{self.term_type}{suffix} Term Payment"

    def is_cancelled(self) -> bool:
        return self.cancelled_by_ops or self.cancelled_by_termination

    def is_resolved(self) -> bool:
        """Check if both boundaries are known"""
        return self.start_date is not None and self.end_date is not None
