"""Agreement schedule engine core: pure functions over immutable agreement views"""

from landmate.core.growth import compounding_growth, linear_growth
from landmate.core.date_calendar import Calendar, GregorianCalendar, DEFAULT_CALENDAR
from landmate.core.period_calendar import period_end, prorata_factor
from landmate.core.term_resolver import TermResolution, resolve_terms
from landmate.core.schedule_generator import (
    ScheduleContext,
    base_payment,
    generate_blended_payments,
    generate_date_payments,
    generate_standard_payments,
    generate_term_payments,
    match_payment_model,
    schedule_terms,
)
from landmate.core.agreement_index import AgreementIndex
from landmate.core.amendment_overlay import apply_amendments
from landmate.core.document_links import apply_deed_chain, associated_documents
from landmate.core.settlement import settle_purchase_price

__all__ = [
    "AgreementIndex",
    "Calendar",
    "DEFAULT_CALENDAR",
    "GregorianCalendar",
    "ScheduleContext",
    "TermResolution",
    "apply_amendments",
    "apply_deed_chain",
    "associated_documents",
    "base_payment",
    "compounding_growth",
    "generate_blended_payments",
    "generate_date_payments",
    "generate_standard_payments",
    "generate_term_payments",
    "linear_growth",
    "match_payment_model",
    "period_end",
    "prorata_factor",
    "resolve_terms",
    "schedule_terms",
    "settle_purchase_price",
]
