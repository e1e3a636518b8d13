"""Shared fixtures: agreement records built from plain snapshot dicts."""

from typing import Any, Dict

import pytest

from landmate.core.date_calendar import GregorianCalendar
from landmate.domain.entities import Agreement


def agreement_record(**overrides: Any) -> Dict[str, Any]:
    """Minimal original lease record as it appears in a snapshot"""
    record: Dict[str, Any] = {
        "id": "lease-1",
        "name": "Smith Lease",
        "agreement_group": "G1",
        "document_type": "Lease",
        "project_id": "P-100",
        "effective_date": "2024-01-01",
        "grantor": [{"grantor/lessor_name": "Jane Smith and John Smith"}],
        "property_description": [{"county": "Travis", "state": "TX", "agreement_acres": 50}],
        "agreement_terms": [],
        "term_payment_models": [],
        "date_payment_models": [],
    }
    record.update(overrides)
    return record


@pytest.fixture
def make_agreement():
    """Factory building a validated Agreement from record overrides"""

    def _make(**overrides: Any) -> Agreement:
        return Agreement.model_validate(agreement_record(**overrides))

    return _make


@pytest.fixture
def calendar() -> GregorianCalendar:
    return GregorianCalendar()
