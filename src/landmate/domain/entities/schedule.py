"""Computed agreement schedule aggregate"""

from datetime import date
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from landmate.domain.entities.agreement import Agreement
from landmate.domain.entities.agreement_term import AgreementTerm
from landmate.domain.entities.payment_event import PaymentEvent


class AssociatedDocuments(BaseModel):
    """Ids of same-group documents associated with an original agreement"""

    model_config = ConfigDict(frozen=True)

    payment_directives: List[str] = Field(default_factory=list)
    recorded_docs: List[str] = Field(default_factory=list)
    letters: List[str] = Field(default_factory=list)
    deeds: List[str] = Field(default_factory=list)


class AgreementSchedule(BaseModel):
    """
    Result of one agreement's computation.

    `agreement` is the effective view after amendments and deeds,
    `agreement_terms` the resolved terms with their periodic payments and
    `date_payments` the date-model and purchase price events.
    """

    model_config = ConfigDict(frozen=True)

    agreement: Agreement
    agreement_terms: List[AgreementTerm] = Field(default_factory=list)
    date_payments: List[PaymentEvent] = Field(default_factory=list)
    associated_documents: AssociatedDocuments = Field(default_factory=AssociatedDocuments)
    final_term_end_date: Optional[date] = None
    final_term_end_text: Optional[str] = None

    @property
    def agreement_id(self) -> str:
        return self.agreement.id

    def term_payments(self) -> List[PaymentEvent]:
        return [p for term in self.agreement_terms for p in term.periodic_payments]

    def all_payments(self) -> List[PaymentEvent]:
        """Every event on the agreement ordered by payment date"""
        return sorted(self.term_payments() + list(self.date_payments), key=lambda p: p.payment_date)

    def total_amount(self) -> float:
        return sum(p.payment_amount for p in self.all_payments())
