"""Value objects for the schedule engine"""

from landmate.domain.value_objects.payment_frequency import PaymentFrequency
from landmate.domain.value_objects.first_payment_start import FirstPaymentStart
from landmate.domain.value_objects.payment_source import PaymentSource
from landmate.domain.value_objects.term_type import TermType

__all__ = ["PaymentFrequency", "FirstPaymentStart", "PaymentSource", "TermType"]
