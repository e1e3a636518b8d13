"""
Agreement Schedule Service.

Orchestrates one agreement's computation end to end:
amendment overlay -> deed chain -> term resolution -> term payments ->
date payments -> purchase price settlement. Each agreement is computed
independently against a read-only index of the snapshot, and a failure is
reported as an Err for that agreement only.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from loguru import logger
from neopipe import Result, Ok, Err
from pydantic import ValidationError

from landmate.core.agreement_index import AgreementIndex
from landmate.core.amendment_overlay import apply_amendments
from landmate.core.date_calendar import Calendar, DEFAULT_CALENDAR
from landmate.core.document_links import apply_deed_chain, associated_documents
from landmate.core.schedule_generator import ScheduleContext, generate_date_payments, schedule_terms
from landmate.core.settlement import settle_purchase_price
from landmate.core.term_resolver import resolve_terms
from landmate.domain.entities import Agreement, AgreementSchedule
from landmate.services.factory import ServiceFactoryABC
from landmate.utils.file_utils import read_json
from landmate.utils.settings.core import EngineSettings


class AgreementScheduleService:
    """
    Service computing payment schedules for agreements.

    Pure and synchronous: the same snapshot always yields the same schedules.
    """

    def __init__(self, settings: Optional[EngineSettings] = None, calendar: Calendar = DEFAULT_CALENDAR):
        """
        Initialize schedule service.

        Args:
            settings: Engine settings. If None, uses default settings.
            calendar: Date arithmetic implementation
        """
        self.settings = settings or EngineSettings()
        self.calendar = calendar

    def effective_view(self, agreement: Agreement, index: AgreementIndex) -> Agreement:
        """Agreement with its amendment chain and deed chain applied"""
        view = apply_amendments(agreement, index)
        return apply_deed_chain(view, index, self.settings.deed_document_type)

    def build_schedule(self, agreement: Agreement, index: AgreementIndex) -> AgreementSchedule:
        """
        Compute the schedule of one agreement.

        Args:
            agreement: Raw agreement record from the snapshot
            index: Read-only index of the whole snapshot

        Returns:
            AgreementSchedule with resolved terms and every payment event
        """
        view = self.effective_view(agreement, index)

        resolution = resolve_terms(
            view.agreement_terms,
            view.effective_date,
            view.operational_details,
            view.termination_date,
            calendar=self.calendar,
            days_per_year=self.settings.fractional_year_days,
            date_format=self.settings.date_text_format,
        )

        context = ScheduleContext.from_agreement(view, self.calendar, self.settings.rounding_precision)
        terms = schedule_terms(resolution.terms, view.term_payment_models, context)
        date_payments = generate_date_payments(view.date_payment_models, context)

        term_payments = [p for term in terms for p in term.periodic_payments]
        date_payments = date_payments + settle_purchase_price(
            view,
            term_payments,
            date_payments,
            context,
            payment_type=self.settings.purchase_price_payment_type,
        )

        final_end = resolution.final_term_end_date
        return AgreementSchedule(
            agreement=view,
            agreement_terms=terms,
            date_payments=date_payments,
            associated_documents=associated_documents(view, index),
            final_term_end_date=final_end,
            final_term_end_text=self.calendar.format(final_end, self.settings.date_text_format) if final_end else None,
        )

    def compute(self, agreement: Agreement, index: AgreementIndex) -> Result[AgreementSchedule, str]:
        """
        Compute one agreement's schedule, capturing failures as Err.

        Returns:
            Result[AgreementSchedule, str]: Ok with schedule or Err with error message

        Example:
            >>> service = AgreementScheduleServiceFactory.create_default()
            >>> index = AgreementIndex(agreements)
            >>> result = service.compute(agreements[0], index)
            >>> if result.is_ok():
            ...     schedule = result.unwrap()
        """
        try:
            schedule = self.build_schedule(agreement, index)
            logger.info(
                f"Computed schedule for agreement {agreement.id}: "
                f"{len(schedule.agreement_terms)} terms, {len(schedule.all_payments())} payments"
            )
            return Ok(schedule)

        except Exception as e:
            error_msg = f"Schedule computation failed for agreement {agreement.id}: {str(e)}"
            logger.error(error_msg)
            return Err(error_msg)

    def compute_all(
        self,
        agreements: Iterable[Agreement],
        originals_only: bool = True,
    ) -> Dict[str, Result[AgreementSchedule, str]]:
        """
        Compute schedules for a whole snapshot.

        Args:
            agreements: Every document of the snapshot
            originals_only: Skip documents without an effective date (amendments,
                letters, directives), which are folded into their originals

        Returns:
            Mapping of agreement id to its Result
        """
        index = AgreementIndex(agreements)
        targets = index.originals() if originals_only else list(index)

        results = {agreement.id: self.compute(agreement, index) for agreement in targets}
        failed = sum(1 for r in results.values() if r.is_err())
        logger.info(f"Computed {len(results) - failed} of {len(results)} agreement schedules")
        return results

    def load_snapshot(self, file_path: str | Path) -> Result[List[Agreement], str]:
        """
        Load agreement records from a JSON snapshot.

        The file holds a list of records, or an object with an "agreements" list.
        """
        try:
            data: Any = read_json(file_path)
            records = data.get("agreements", []) if isinstance(data, dict) else data
            if not isinstance(records, list):
                return Err(f"Snapshot {file_path} does not contain a list of agreements")
            return Ok([Agreement.model_validate(record) for record in records])

        except ValidationError as e:
            error_msg = f"Invalid agreement record in {file_path}: {e}"
            logger.error(error_msg)
            return Err(error_msg)
        except Exception as e:
            error_msg = f"Could not load snapshot {file_path}: {str(e)}"
            logger.error(error_msg)
            return Err(error_msg)


class AgreementScheduleServiceFactory(ServiceFactoryABC[AgreementScheduleService]):
    """Factory for creating AgreementScheduleService with default configurations."""

    @classmethod
    def from_settings(cls, settings: EngineSettings) -> AgreementScheduleService:
        """Create the service on the Gregorian calendar"""
        return AgreementScheduleService(settings=settings, calendar=DEFAULT_CALENDAR)
