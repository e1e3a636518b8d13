"""Services package for high-level business logic."""

from landmate.services.schedule_service import (
    AgreementScheduleService,
    AgreementScheduleServiceFactory,
)

__all__ = [
    "AgreementScheduleService",
    "AgreementScheduleServiceFactory",
]
