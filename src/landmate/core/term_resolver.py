"""
Term date resolution.

Turns declarative agreement terms into a chronological timeline. Start date
precedence per term:

1. a non-extension Construction/Operations term adopts the matching
   operational commencement date;
2. otherwise the day after the previous term ends, or the agreement's
   commencement (falling back to effective) date for the first term.

End dates are capped to the termination date, and operational milestones
truncate or cancel the terms they overtake.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence

from loguru import logger

from landmate.core.date_calendar import Calendar, DEFAULT_CALENDAR
from landmate.domain.entities import AgreementTerm, OperationalDetails
from landmate.domain.entities.facts import num
from landmate.domain.value_objects import TermType


@dataclass(frozen=True)
class TermResolution:
    """Resolved terms in ordinal order and the end of the last one"""
    terms: List[AgreementTerm] = field(default_factory=list)
    final_term_end_date: Optional[date] = None


def _milestone_start(term: AgreementTerm, ops: OperationalDetails) -> Optional[date]:
    if term.extension:
        return None
    if term.term_type == TermType.CONSTRUCTION:
        return ops.construction_commencement
    if term.term_type == TermType.OPERATIONS:
        return ops.operations_commencement
    return None


def cumulative_adjustments(terms: Sequence[AgreementTerm], term: AgreementTerm) -> tuple[float, float]:
    """
    Cumulative (increase amount, escalation rate) for a term.

    Folds every term sharing its payment model with an ordinal up to its own:
    increases add, escalation rates (percent) multiply.
    """
    cohort = sorted(
        (t for t in terms if t.term_ordinal <= term.term_ordinal and t.payment_model == term.payment_model),
        key=lambda t: t.term_ordinal,
    )
    increase = 0.0
    escalation = 1.0
    for t in cohort:
        increase += num(t.increase_amount)
        escalation *= 1 + num(t.escalation_rate) / 100
    return increase, escalation


def resolve_terms(
    terms: Sequence[AgreementTerm],
    effective_date: Optional[date],
    operational_details: Optional[OperationalDetails] = None,
    termination_date: Optional[date] = None,
    calendar: Calendar = DEFAULT_CALENDAR,
    days_per_year: float = 365.25,
    date_format: str = "%m/%d/%Y",
) -> TermResolution:
    """
    Resolve start/end dates and cumulative adjustments for every term.

    Args:
        terms: Declarative terms; the input records are not modified
        effective_date: Agreement effective date
        operational_details: Milestones overriding scheduled boundaries
        termination_date: Caps every term end when present
        calendar: Date arithmetic implementation
        days_per_year: Day count for the fractional part of a term length
        date_format: strftime format for the text date fields

    Returns:
        TermResolution with new term copies; unresolved (dates left empty)
        when neither a commencement nor an effective date is known
    """
    ops = operational_details or OperationalDetails()
    ordered = sorted(terms, key=lambda t: t.term_ordinal)

    anchor = ops.commencement_date or effective_date
    if anchor is None:
        logger.debug("No effective or commencement date, term dates left unresolved")
        return TermResolution(terms=list(ordered))

    first_ops = ops.first_ops_date
    resolved: List[AgreementTerm] = []
    cursor = anchor

    for term in ordered:
        start = _milestone_start(term, ops) or cursor
        end: Optional[date] = None
        cancelled_by_ops = False
        cancelled_by_termination = False

        if term.term_length_years:
            scheduled_end = calendar.add_days(
                calendar.add_fractional_years(start, term.term_length_years, days_per_year), -1
            )
            end = min(scheduled_end, termination_date) if termination_date else scheduled_end
            if end < start:
                cancelled_by_termination = True
                end = None

        if not TermType.is_operational(term.term_type):
            if first_ops:
                if start >= first_ops:
                    cancelled_by_ops = True
                elif end and end >= first_ops:
                    end = calendar.add_days(first_ops, -1)
        elif term.term_type == TermType.CONSTRUCTION and ops.operations_commencement:
            if end and end >= ops.operations_commencement:
                end = calendar.add_days(ops.operations_commencement, -1)
                if end < start:
                    cancelled_by_ops = True
                    end = None

        increase, escalation = cumulative_adjustments(ordered, term)

        resolved.append(
            term.model_copy(
                update={
                    "start_date": start,
                    "end_date": end,
                    "start_date_text": calendar.format(start, date_format),
                    "end_date_text": calendar.format(end, date_format) if end else None,
                    "cancelled_by_ops": cancelled_by_ops,
                    "cancelled_by_termination": cancelled_by_termination,
                    "cumulative_increase_amount": increase,
                    "cumulative_escalation_rate": escalation,
                }
            )
        )

        cursor = calendar.add_days(end, 1) if end else start

    final_end = resolved[-1].end_date if resolved else None
    return TermResolution(terms=resolved, final_term_end_date=final_end)
