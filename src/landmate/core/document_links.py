"""Deed chain and associated-document lookups within an agreement group."""

from datetime import date

from landmate.core.agreement_index import AgreementIndex
from landmate.domain.entities import Agreement, AssociatedDocuments

PURCHASED_TAG = "Purchased"


def apply_deed_chain(agreement: Agreement, index: AgreementIndex, deed_document_type: str = "Deed") -> Agreement:
    """
    Adopt the deed chain of the agreement's group.

    The first deed in the group is the root deed; later deeds, ordered by
    amendment date, override its effective date and property descriptions.
    A non-deed agreement then takes the deed's property descriptions and is
    tagged as purchased.
    """
    if agreement.document_type == deed_document_type or not agreement.agreement_group:
        return agreement

    deeds = [doc for doc in index.group(agreement.agreement_group) if doc.document_type == deed_document_type]
    if not deeds:
        return agreement

    root, later = deeds[0], deeds[1:]
    effective_date = root.effective_date
    property_description = root.property_description
    for deed in sorted(later, key=lambda d: d.amendment_date or date.max):
        if deed.effective_date:
            effective_date = deed.effective_date
        if deed.property_description:
            property_description = deed.property_description

    tags = list(agreement.tags)
    if PURCHASED_TAG not in tags:
        tags.append(PURCHASED_TAG)

    updates = {
        "deed_count": len(deeds),
        "deed_effective_date": effective_date,
        "tags": tags,
    }
    if property_description:
        updates["property_description"] = property_description
    return agreement.model_copy(update=updates)


def associated_documents(agreement: Agreement, index: AgreementIndex) -> AssociatedDocuments:
    """Ids of same-group directives, recorded documents, letters and deeds of an original agreement"""
    if not agreement.is_original():
        return AssociatedDocuments()

    group = index.group(agreement.agreement_group)
    return AssociatedDocuments(
        payment_directives=[d.id for d in group if d.payment_directive_date],
        recorded_docs=[d.id for d in group if d.recorded_date],
        letters=[d.id for d in group if d.letter_date],
        deeds=[d.id for d in group if d.deed_date],
    )
