"""Purchase price settlement against prior qualifying payments."""

from itertools import chain
from typing import Iterable, List

from loguru import logger

from landmate.core.payees import nickname_grantor, payee_shares
from landmate.core.schedule_generator import ScheduleContext
from landmate.domain.entities import Agreement, PaymentEvent
from landmate.domain.value_objects import PaymentSource


def applicable_payments_total(*payment_groups: Iterable[PaymentEvent]) -> float:
    """Sum of every event flagged as applicable to the purchase price"""
    return sum(p.payment_amount for p in chain(*payment_groups) if p.applicable_to_purchase)


def settle_purchase_price(
    agreement: Agreement,
    term_payments: Iterable[PaymentEvent],
    date_payments: Iterable[PaymentEvent],
    context: ScheduleContext,
    payment_type: str = "Purchase Price",
) -> List[PaymentEvent]:
    """
    Closing payment netting the full purchase price against prior payments.

    Emitted per grantor on the purchase (or estimated closing) date, only for
    agreements with a purchase price, a closing date and no termination.
    """
    closing_date = agreement.closing_date
    if not agreement.full_purchase_price or closing_date is None or agreement.termination_date:
        return []

    already_paid = applicable_payments_total(term_payments, date_payments)
    balance = agreement.full_purchase_price - already_paid
    logger.debug(
        f"Purchase price {agreement.full_purchase_price} less {already_paid} applicable payments "
        f"for agreement {agreement.id}"
    )

    return [
        PaymentEvent(
            payment_source=PaymentSource.PURCHASE_PRICE,
            model_id=None,
            project_id=agreement.project_id,
            payment_index=0,
            payment_date=closing_date,
            payment_type=payment_type,
            payment_amount=balance * share,
            payee=nickname_grantor(grantor.name),
            applicable_to_purchase=True,
            refundable=False,
            after_outside_date=context.after_outside_date(closing_date),
        )
        for grantor, share in zip(agreement.grantor, payee_shares(agreement.grantor))
    ]
