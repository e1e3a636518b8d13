"""
Payment schedule generation.

Three generators share the same period stepping, lag and payee-split rules:

- standard: term-anchored, one compounding escalation step per elapsed
  escalation period;
- blended: term-anchored with a prorated first period and periodic
  escalation, where one payment may straddle an escalation anniversary and
  is summed from day-weighted segments;
- date-based: calendar-anchored models independent of terms.

Every loop advances a strictly increasing period boundary, and an
unrecognised frequency stops generation for that model only.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Iterator, List, Optional, Sequence

from loguru import logger

from landmate.core.date_calendar import Calendar, DEFAULT_CALENDAR
from landmate.core.growth import compounding_growth, round_to
from landmate.core.payees import payee_name, payee_shares
from landmate.core.period_calendar import period_end, prorata_factor
from landmate.domain.entities import (
    Agreement,
    AgreementTerm,
    DatePaymentModel,
    Grantor,
    OperationalDetails,
    PaymentEvent,
    TermPaymentModel,
)
from landmate.domain.entities.facts import num
from landmate.domain.value_objects import FirstPaymentStart, PaymentFrequency, PaymentSource


@dataclass(frozen=True)
class ScheduleContext:
    """Agreement-level inputs shared by every generator"""
    grantors: Sequence[Grantor] = field(default_factory=tuple)
    operational_details: OperationalDetails = field(default_factory=OperationalDetails)
    controlled_acres: float = 0.0
    project_id: Optional[str] = None
    outside_date: Optional[date] = None
    closing_date: Optional[date] = None
    termination_date: Optional[date] = None
    calendar: Calendar = DEFAULT_CALENDAR
    precision: int = 4

    @classmethod
    def from_agreement(
        cls,
        agreement: Agreement,
        calendar: Calendar = DEFAULT_CALENDAR,
        precision: int = 4,
    ) -> "ScheduleContext":
        """Build the context from an (effective) agreement view"""
        return cls(
            grantors=tuple(agreement.grantor),
            operational_details=agreement.operational_details,
            controlled_acres=agreement.total_controlled_acres,
            project_id=agreement.project_id,
            outside_date=agreement.outside_date,
            closing_date=agreement.date_purchased,
            termination_date=agreement.termination_date,
            calendar=calendar,
            precision=precision,
        )

    def after_outside_date(self, payment_date: date) -> bool:
        return bool(self.outside_date and payment_date > self.outside_date)


@dataclass(frozen=True)
class SchedulePeriod:
    """One payment period of a term"""
    index: int
    period_start: date
    period_end: date
    payment_date: date


def match_payment_model(term: AgreementTerm, models: Sequence[TermPaymentModel]) -> Optional[TermPaymentModel]:
    """Model whose `model_type` matches the term's model key, or the first model for an unnamed term"""
    if not models:
        return None
    name = term.model_key
    if not name:
        return models[0]
    return next((m for m in models if m.model_type == name), None)


def base_payment(
    model: Optional[TermPaymentModel],
    operational_details: Optional[OperationalDetails],
    cumulative_escalation_rate: float,
    cumulative_increase_amount: float,
    controlled_acres: float,
) -> float:
    """
    Periodic base payment: the largest of every way the model prices a period,
    then adjusted by the term-level cumulative increase and escalation.
    """
    if model is None:
        return 0.0
    ops = operational_details or OperationalDetails()

    base = max(
        num(model.minimum_payment),
        num(model.payment_per_mw) * num(ops.mw),
        num(ops.inverter_count) * num(ops.inverter_rating_mvas) * num(model.payment_per_mva),
        num(model.flat_payment_amount),
        num(model.payment_per_acre) * num(controlled_acres),
    )
    return (base + num(cumulative_increase_amount)) * cumulative_escalation_rate


def first_payment_date(term: AgreementTerm) -> date:
    """First payment date of a resolved term per its first-payment policy"""
    start = term.start_date
    policy = term.first_payment_start
    if policy == FirstPaymentStart.START_WITH_TERM:
        return start
    if policy == FirstPaymentStart.NEXT_JAN_1:
        return date(start.year + 1, 1, 1)
    if policy == FirstPaymentStart.FIRST_OF_NEXT_MONTH:
        return date(start.year + (start.month // 12), start.month % 12 + 1, 1)
    return term.first_payment_date or start


def iter_term_periods(
    term: AgreementTerm,
    frequency: PaymentFrequency,
    prorated: bool,
    closing_date: Optional[date] = None,
    calendar: Calendar = DEFAULT_CALENDAR,
) -> Iterator[SchedulePeriod]:
    """
    Step through a resolved term's payment periods.

    The first period runs from the term start to the end of the period that
    begins on the first payment date; each later period starts the day after
    the previous one ends. Stops at the term end, after the closing date, or
    when no period end can be computed.
    """
    period_start = term.start_date
    payment_date = first_payment_date(term)
    index = 0

    while period_start < term.end_date:
        if closing_date and period_start > closing_date:
            break

        end = period_end(payment_date, frequency, prorated, term.end_date, calendar)
        if end is None:
            logger.debug(f"Unrecognised payment frequency '{frequency}', stopping term schedule")
            break
        if end < period_start:
            break

        yield SchedulePeriod(index=index, period_start=period_start, period_end=end, payment_date=payment_date)

        period_start = calendar.add_days(end, 1)
        payment_date = period_start
        index += 1


def late_payment_date(
    payment_date: date,
    index: int,
    first_lag: Optional[float],
    subsequent_lag: Optional[float],
    calendar: Calendar = DEFAULT_CALENDAR,
) -> Optional[date]:
    """Due date after applying the first or subsequent payment lag, None without a lag"""
    lag = first_lag if index == 0 else subsequent_lag
    if not lag:
        return None
    return calendar.add_days(payment_date, int(lag))


def _lag_applies(term: AgreementTerm, model: TermPaymentModel) -> bool:
    return not term.extension or model.apply_payment_lag_to_extension


def _split_events(
    total: float,
    context: ScheduleContext,
    payee_override: Optional[str],
    **event_fields,
) -> List[PaymentEvent]:
    """One event per grantor, each carrying its share of `total`"""
    return [
        PaymentEvent(
            payment_amount=total * share,
            payee=payee_name(grantor, payee_override),
            project_id=context.project_id,
            **event_fields,
        )
        for grantor, share in zip(context.grantors, payee_shares(context.grantors))
    ]


def _prior_cohort_years(term: AgreementTerm, all_terms: Sequence[AgreementTerm]) -> float:
    return sum(
        num(t.term_length_years)
        for t in all_terms
        if t.term_ordinal < term.term_ordinal and t.payment_model == term.payment_model
    )


def _escalation_frequency_index(model: TermPaymentModel) -> float:
    """Payment periods per escalation period, 1 when either cadence has no ratio"""
    payments = model.payment_frequency.periods_per_year
    escalations = model.periodic_escalation_frequency.periods_per_year if model.periodic_escalation_frequency else None
    if payments and escalations:
        return payments / escalations
    return 1


def _previous_periods(term: AgreementTerm, model: TermPaymentModel, all_terms: Sequence[AgreementTerm]) -> float:
    """Payment periods elapsed in earlier terms of the same payment model"""
    escalation = model.periodic_escalation_frequency
    payments_per_year = model.payment_frequency.periods_per_year
    if not escalation or not escalation.is_recognized() or not payments_per_year:
        return 0
    return _prior_cohort_years(term, all_terms) * payments_per_year


def _term_is_payable(term: AgreementTerm, model: Optional[TermPaymentModel], context: ScheduleContext) -> bool:
    if term.is_cancelled():
        logger.debug(f"Term {term.term_ordinal} cancelled, no payments")
        return False
    if not context.grantors:
        logger.debug(f"Term {term.term_ordinal} has no grantors, no payments")
        return False
    if model is None:
        logger.debug(f"Term {term.term_ordinal} has no matching payment model '{term.model_key}'")
        return False
    if not term.is_resolved():
        logger.debug(f"Term {term.term_ordinal} has no start or end date, no payments")
        return False
    return True


def generate_standard_payments(
    term: AgreementTerm,
    model: Optional[TermPaymentModel],
    context: ScheduleContext,
    all_terms: Sequence[AgreementTerm] = (),
) -> List[PaymentEvent]:
    """
    Period-stepping schedule for one term.

    Each period's amount is the base payment plus the model's linear
    increase, compounded once per elapsed escalation period and scaled by the
    period's prorata factor.
    """
    if not _term_is_payable(term, model, context):
        return []

    periodic_payment = base_payment(
        model,
        context.operational_details,
        term.cumulative_escalation_rate,
        term.cumulative_increase_amount,
        context.controlled_acres,
    )
    rate = num(model.periodic_escalation_rate) / 100
    frequency_index = _escalation_frequency_index(model)
    previous_periods = _previous_periods(term, model, all_terms)
    lag_applies = _lag_applies(term, model)

    payments: List[PaymentEvent] = []
    for period in iter_term_periods(
        term, model.payment_frequency, model.prorated_first_period, context.closing_date, context.calendar
    ):
        factor = prorata_factor(
            period.period_start, period.period_end, model.payment_frequency, context.calendar, context.precision
        )
        elapsed = previous_periods + period.index
        amount = compounding_growth(
            periodic_payment + num(model.increase_amount) * period.index,
            rate,
            math.floor(elapsed / frequency_index),
        ) * factor

        late_date = None
        if lag_applies:
            late_date = late_payment_date(
                period.payment_date, period.index, model.first_payment_lag, model.subsequent_payment_lag, context.calendar
            )

        payments.extend(
            _split_events(
                amount,
                context,
                model.payee,
                payment_source=PaymentSource.TERM_MODEL,
                model_id=model.id,
                payment_index=period.index,
                payment_date=period.payment_date,
                late_payment_date=late_date,
                payment_type=term.payment_type,
                payment_period_start=period.period_start,
                payment_period_end=period.period_end,
                prorata_factor=factor,
                applicable_to_purchase=model.applicable_to_purchase,
                refundable=False,
                after_outside_date=context.after_outside_date(period.payment_date),
                previous_periods=elapsed,
            )
        )

    payments.sort(key=lambda p: p.payment_date)
    return payments


def escalation_start_date(term: AgreementTerm, all_terms: Sequence[AgreementTerm]) -> Optional[date]:
    """Start of the earliest earlier term sharing the payment model, else the term's own start"""
    earlier = sorted(
        (t for t in all_terms if t.term_ordinal < term.term_ordinal and t.payment_model == term.payment_model),
        key=lambda t: t.term_ordinal,
    )
    if earlier and earlier[0].start_date:
        return earlier[0].start_date
    return term.start_date


def blended_period_amount(
    period_start: date,
    period_end_date: date,
    escalation_start: date,
    rate: float,
    base: float,
    frequency: PaymentFrequency,
    calendar: Calendar = DEFAULT_CALENDAR,
) -> tuple[float, float, int]:
    """
    Day-weighted payment for a period that may straddle escalation anniversaries.

    The period is cut at each anniversary of `escalation_start`. Every segment
    weighs its share of a full payment period, measured in frequency units
    from the segment start, and is escalated by the number of whole years
    elapsed at its start. A segment covering a whole period weighs 1.0.

    Returns:
        (amount, total weight, escalation index at the period start)
    """
    unit_months = frequency.months
    period_days = (period_end_date - period_start).days + 1
    total = 0.0
    weight_sum = 0.0
    first_index: Optional[int] = None
    cursor = period_start

    while cursor <= period_end_date:
        index = max(0, math.floor(calendar.diff_in_years(escalation_start, cursor)))
        next_anniversary = calendar.add_years(escalation_start, index + 1)
        segment_end = min(period_end_date, calendar.add_days(next_anniversary, -1))
        next_cursor = calendar.add_days(segment_end, 1)

        if unit_months:
            weight = calendar.diff_in_units(cursor, next_cursor, unit_months)
        else:
            # Once per Term: share of the period itself
            weight = (next_cursor - cursor).days / period_days
        total += compounding_growth(base, rate, index) * weight
        weight_sum += weight
        if first_index is None:
            first_index = index

        cursor = next_cursor

    return total, weight_sum, first_index or 0


def generate_blended_payments(
    term: AgreementTerm,
    model: Optional[TermPaymentModel],
    context: ScheduleContext,
    all_terms: Sequence[AgreementTerm] = (),
) -> List[PaymentEvent]:
    """
    Schedule for a term whose model prorates the first period and escalates
    periodically, summing day-weighted segments per payment.
    """
    if not _term_is_payable(term, model, context):
        return []
    if not model.payment_frequency.is_recognized():
        logger.debug(f"Unrecognised payment frequency on model '{model.model_type}', no blended schedule")
        return []

    base = base_payment(
        model,
        context.operational_details,
        term.cumulative_escalation_rate,
        term.cumulative_increase_amount,
        context.controlled_acres,
    )
    escalation_start = escalation_start_date(term, all_terms)
    rate = num(model.periodic_escalation_rate) / 100
    lag_applies = _lag_applies(term, model)

    payments: List[PaymentEvent] = []
    for period in iter_term_periods(
        term, model.payment_frequency, model.prorated_first_period, context.closing_date, context.calendar
    ):
        amount, weight, escalation_index = blended_period_amount(
            period.period_start,
            period.period_end,
            escalation_start,
            rate,
            base,
            model.payment_frequency,
            context.calendar,
        )

        late_date = None
        if lag_applies:
            late_date = late_payment_date(
                period.payment_date, period.index, model.first_payment_lag, model.subsequent_payment_lag, context.calendar
            )

        payments.extend(
            _split_events(
                amount,
                context,
                model.payee,
                payment_source=PaymentSource.TERM_MODEL,
                model_id=model.id,
                payment_index=period.index,
                payment_date=period.payment_date,
                late_payment_date=late_date,
                payment_type=term.payment_type,
                payment_period_start=period.period_start,
                payment_period_end=period.period_end,
                prorata_factor=round_to(weight, context.precision),
                applicable_to_purchase=model.applicable_to_purchase,
                refundable=False,
                after_outside_date=context.after_outside_date(period.payment_date),
                previous_periods=escalation_index,
            )
        )

    payments.sort(key=lambda p: p.payment_date)
    return payments


def generate_term_payments(
    term: AgreementTerm,
    models: Sequence[TermPaymentModel],
    context: ScheduleContext,
    all_terms: Sequence[AgreementTerm] = (),
) -> List[PaymentEvent]:
    """Pick the blended or standard generator for a term's payment model"""
    model = match_payment_model(term, models)
    if model is not None and model.uses_blended_escalation():
        return generate_blended_payments(term, model, context, all_terms)
    return generate_standard_payments(term, model, context, all_terms)


def schedule_terms(
    terms: Sequence[AgreementTerm],
    models: Sequence[TermPaymentModel],
    context: ScheduleContext,
) -> List[AgreementTerm]:
    """New copies of resolved terms carrying their periodic payments"""
    return [
        term.model_copy(update={"periodic_payments": generate_term_payments(term, models, context, terms)})
        for term in terms
    ]


def generate_date_model_payments(model: DatePaymentModel, context: ScheduleContext) -> List[PaymentEvent]:
    """
    Payments of one date-based model.

    Runs from the one-time or begin date until the earliest of the
    termination, one-time and end dates, stopping after the closing date.
    Period n pays (amount + increase * (n - 1)) compounded n times.
    """
    if not model.is_schedulable() or not context.grantors:
        logger.debug(f"Date payment model {model.id} is incomplete or has no grantors, skipped")
        return []

    payment_date = model.date_one_time or model.date_begin
    bounds = [d for d in (context.termination_date, model.date_one_time, model.date_end) if d]
    last_date = min(bounds)
    source = PaymentSource.DATE_MODEL_ONE_TIME if model.is_one_time() else PaymentSource.DATE_MODEL
    rate = num(model.periodic_escalation_rate) / 100

    payments: List[PaymentEvent] = []
    period = 1
    while payment_date <= last_date:
        if context.closing_date and payment_date > context.closing_date:
            break

        amount = compounding_growth(
            num(model.payment_amount) + num(model.increase_amount) * (period - 1),
            rate,
            period,
        )
        late_date = late_payment_date(
            payment_date, period - 1, model.first_payment_lag, model.subsequent_payment_lag, context.calendar
        )

        payments.extend(
            _split_events(
                amount,
                context,
                model.payee,
                payment_source=source,
                model_id=model.id,
                payment_index=period - 1,
                payment_date=payment_date,
                late_payment_date=late_date,
                payment_type=model.payment_type,
                applicable_to_purchase=model.applicable_to_purchase,
                refundable=model.refundable,
                after_outside_date=context.after_outside_date(payment_date),
            )
        )

        period += 1
        months = model.frequency.months if model.frequency else None
        if months is None:
            if not model.is_one_time():
                logger.debug(f"Unrecognised frequency '{model.frequency}' on date model {model.id}, stopping")
            break
        payment_date = context.calendar.add_months(model.date_one_time or model.date_begin, months * (period - 1))

    return payments


def generate_date_payments(models: Sequence[DatePaymentModel], context: ScheduleContext) -> List[PaymentEvent]:
    """Payments of every date-based model, in model order"""
    payments: List[PaymentEvent] = []
    for model in models:
        payments.extend(generate_date_model_payments(model, context))
    return payments
