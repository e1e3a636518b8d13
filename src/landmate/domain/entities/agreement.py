"""Agreement domain entity and its owned fact records"""

from datetime import date
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, computed_field

from landmate.domain.entities.agreement_term import AgreementTerm
from landmate.domain.entities.facts import FactDate, Flag, Number, Text, num
from landmate.domain.entities.payment_model import DatePaymentModel, TermPaymentModel


class Grantor(BaseModel):
    """Grantor/lessor on an agreement, the default payee of its payments"""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: Text = Field(default=None, alias="grantor/lessor_name")
    payment_split: Number = None


class PropertyDescription(BaseModel):
    """Land parcel covered by an agreement"""

    model_config = ConfigDict(frozen=True, extra="allow")

    county: Text = None
    state: Text = None
    agreement_acres: Number = None
    exclude_acres_from_controlled_acres: Flag = False


class OperationalDetails(BaseModel):
    """Operational milestones and plant quantities used by payment models"""

    model_config = ConfigDict(frozen=True, extra="ignore")

    commencement_date: FactDate = None
    construction_commencement: FactDate = None
    operations_commencement: FactDate = None
    mw: Number = None
    inverter_count: Number = None
    inverter_rating_mvas: Number = None

    @property
    def first_ops_date(self) -> Optional[date]:
        """Earliest operational milestone, construction or operations"""
        dates = [d for d in (self.construction_commencement, self.operations_commencement) if d]
        return min(dates) if dates else None


class Termination(BaseModel):
    """Termination fact; any extra metadata fields are kept as supplied"""

    model_config = ConfigDict(frozen=True, extra="allow")

    termination_date: FactDate = None

    def is_empty(self) -> bool:
        """Check if the fact carries no values at all"""
        extras = self.model_extra or {}
        return self.termination_date is None and not any(v not in (None, "") for v in extras.values())


class AmendmentRecord(BaseModel):
    """An amending document applied to an agreement's effective view"""

    model_config = ConfigDict(frozen=True)

    id: str
    document_type: Optional[str] = None
    sort_date: date
    amendment_ordinal: Optional[int] = None


# Dates whose presence marks a document as amending its agreement group, in sort precedence order
AMENDMENT_DATE_FIELDS = (
    "amendment_date",
    "letter_date",
    "deed_date",
    "payment_directive_date",
    "recorded_date",
)


class Agreement(BaseModel):
    """
    Agreement aggregate root.

    Holds the typed facts of one land-agreement document (lease, option,
    easement, amendment, deed, letter, directive). Instances are immutable;
    the amendment overlay and deed chain produce new effective views.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: Text = None
    agreement_id: Text = None
    agreement_group: Text = None
    document_type: Text = None
    project_id: Text = None
    project_name: Text = None
    jupiter_entity: Text = None
    grantee: Text = None
    grantor: List[Grantor] = Field(default_factory=list)

    effective_date: FactDate = None
    amendment_date: FactDate = None
    deed_date: FactDate = None
    recorded_date: FactDate = None
    letter_date: FactDate = None
    payment_directive_date: FactDate = None
    outside_date: FactDate = None
    estimated_closing_date: FactDate = None
    date_purchased: FactDate = None
    date_sold: FactDate = None

    full_purchase_price: Number = None

    property_description: List[PropertyDescription] = Field(default_factory=list)
    operational_details: OperationalDetails = Field(default_factory=OperationalDetails)
    agreement_terms: List[AgreementTerm] = Field(default_factory=list)
    term_payment_models: List[TermPaymentModel] = Field(default_factory=list)
    date_payment_models: List[DatePaymentModel] = Field(default_factory=list)
    termination: Termination = Field(default_factory=Termination)
    tags: List[str] = Field(default_factory=list)

    review_status: Text = None
    review_status_notes: Text = None
    review_status_instance_id: Text = None
    review_status_value_instance_id: Text = None
    review_status_doc_id: Text = None

    # Derived by the amendment overlay and deed chain
    amendments: List[AmendmentRecord] = Field(default_factory=list)
    deed_effective_date: Optional[date] = None
    deed_count: int = 0

    @computed_field
    @property
    def total_controlled_acres(self) -> float:
        """Acres under control, excluding descriptions flagged out of the count"""
        return sum(
            num(desc.agreement_acres)
            for desc in self.property_description
            if not desc.exclude_acres_from_controlled_acres
        )

    @computed_field
    @property
    def total_agreement_acres(self) -> float:
        return sum(num(desc.agreement_acres) for desc in self.property_description)

    @property
    def termination_date(self) -> Optional[date]:
        return self.termination.termination_date

    @property
    def closing_date(self) -> Optional[date]:
        """Actual purchase date, or the estimated closing date when not yet purchased"""
        return self.date_purchased or self.estimated_closing_date

    @property
    def amendment_sort_date(self) -> Optional[date]:
        """First amendment-bearing date present, in precedence order"""
        for field_name in AMENDMENT_DATE_FIELDS:
            value = getattr(self, field_name)
            if value:
                return value
        return None

    def is_original(self) -> bool:
        """Originals carry an effective date; amendments do not"""
        return self.effective_date is not None
