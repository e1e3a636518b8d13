"""Domain entities for agreement schedules"""

from landmate.domain.entities.payment_event import PaymentEvent
from landmate.domain.entities.payment_model import TermPaymentModel, DatePaymentModel
from landmate.domain.entities.agreement_term import AgreementTerm
from landmate.domain.entities.agreement import (
    AMENDMENT_DATE_FIELDS,
    Agreement,
    AmendmentRecord,
    Grantor,
    OperationalDetails,
    PropertyDescription,
    Termination,
)
from landmate.domain.entities.schedule import AgreementSchedule, AssociatedDocuments

__all__ = [
    "AMENDMENT_DATE_FIELDS",
    "Agreement",
    "AgreementSchedule",
    "AgreementTerm",
    "AmendmentRecord",
    "AssociatedDocuments",
    "DatePaymentModel",
    "Grantor",
    "OperationalDetails",
    "PaymentEvent",
    "PropertyDescription",
    "TermPaymentModel",
    "Termination",
]
