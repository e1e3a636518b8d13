"""
Amendment overlay: folds an agreement group's amending documents into an
effective view of the original agreement.

Candidates share the base's agreement group, carry an amendment-bearing
date and are not the base itself. They are applied oldest first, keyed on
the first of amendment, letter, deed, payment directive and recorded date.
Overwrite fields take the latest non-empty value; date payment models
accumulate across every amendment.
"""

from typing import Any, List, Tuple

from loguru import logger

from landmate.core.agreement_index import AgreementIndex
from landmate.domain.entities import Agreement, AmendmentRecord, Termination

OVERWRITE_FIELDS = (
    "effective_date",
    "outside_date",
    "property_description",
    "jupiter_entity",
    "grantee",
    "grantor",
    "full_purchase_price",
    "estimated_closing_date",
    "date_purchased",
    "date_sold",
    "agreement_terms",
    "term_payment_models",
    "termination",
)

REVIEW_STATUS_FIELDS = (
    "review_status",
    "review_status_notes",
    "review_status_instance_id",
    "review_status_value_instance_id",
)


def _has_value(value: Any) -> bool:
    if isinstance(value, Termination):
        return not value.is_empty()
    if isinstance(value, (list, tuple, str)):
        return len(value) > 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # Missing numeric facts read as 0
        return value != 0
    return value is not None


def amendment_candidates(base: Agreement, index: AgreementIndex) -> List[Agreement]:
    """Same-group documents carrying an amendment-bearing date, excluding the base"""
    return [
        doc
        for doc in index.group(base.agreement_group)
        if doc.id != base.id and doc.amendment_sort_date is not None
    ]


def order_amendments(candidates: List[Agreement]) -> List[Tuple[Agreement, AmendmentRecord]]:
    """
    Sort candidates by their operative date and number those with an explicit
    amendment date 1..n in that order. Ties keep snapshot order.
    """
    ordered = sorted(candidates, key=lambda doc: doc.amendment_sort_date)
    records = []
    ordinal = 0
    for doc in ordered:
        amendment_ordinal = None
        if doc.amendment_date:
            ordinal += 1
            amendment_ordinal = ordinal
        records.append(
            (
                doc,
                AmendmentRecord(
                    id=doc.id,
                    document_type=doc.document_type,
                    sort_date=doc.amendment_sort_date,
                    amendment_ordinal=amendment_ordinal,
                ),
            )
        )
    return records


def apply_amendments(agreement: Agreement, index: AgreementIndex) -> Agreement:
    """
    Effective view of an original agreement with its amendment chain applied.

    The fold always starts from the snapshot's raw record for the agreement,
    so re-applying it to an already effective view yields the same result.
    Agreements without an effective date are returned unchanged.
    """
    base = index.get(agreement.id) or agreement
    if not base.is_original():
        return agreement
    if not base.agreement_group:
        return base

    ordered = order_amendments(amendment_candidates(base, index))
    if not ordered:
        return base

    updates: dict[str, Any] = {}
    date_payment_models = list(base.date_payment_models)

    for amendment, record in ordered:
        for field_name in OVERWRITE_FIELDS:
            value = getattr(amendment, field_name)
            if _has_value(value):
                updates[field_name] = value

        date_payment_models.extend(amendment.date_payment_models)

        if amendment.review_status:
            for field_name in REVIEW_STATUS_FIELDS:
                updates[field_name] = getattr(amendment, field_name)
            updates["review_status_doc_id"] = amendment.id

    updates["date_payment_models"] = date_payment_models
    updates["amendments"] = [record for _, record in ordered]

    logger.debug(f"Applied {len(ordered)} amending documents to agreement {base.id}")
    return base.model_copy(update=updates)
