"""Unit tests for term payment schedules (standard and blended)."""

from datetime import date

import pytest

from landmate.core.schedule_generator import (
    ScheduleContext,
    base_payment,
    blended_period_amount,
    first_payment_date,
    generate_term_payments,
    match_payment_model,
    schedule_terms,
)
from landmate.core.term_resolver import resolve_terms
from landmate.domain.entities import AgreementTerm, Grantor, OperationalDetails, TermPaymentModel
from landmate.domain.value_objects import PaymentFrequency, PaymentSource


def single_term(start: date, years: float, **fields) -> AgreementTerm:
    """One resolved term named "Lease" starting on `start`"""
    term = AgreementTerm(term_ordinal=1, term_type="Lease", term_length_years=years, **fields)
    return resolve_terms([term], start).terms[0]


def context(*names: str, **fields) -> ScheduleContext:
    grantors = tuple(Grantor(name=name) for name in (names or ("Jane Smith",)))
    return ScheduleContext(grantors=grantors, **fields)


class TestBasePayment:
    def test_per_acre(self):
        model = TermPaymentModel(payment_per_acre=10)
        assert base_payment(model, None, 1.0, 0, 50) == pytest.approx(500)

    def test_largest_pricing_mode_wins(self):
        ops = OperationalDetails(mw=20, inverter_count=10, inverter_rating_mvas=2.5)
        assert base_payment(TermPaymentModel(minimum_payment=600, payment_per_acre=10), ops, 1.0, 0, 50) == 600
        assert base_payment(TermPaymentModel(payment_per_mw=100, flat_payment_amount=1500), ops, 1.0, 0, 0) == 2000
        assert base_payment(TermPaymentModel(payment_per_mva=30), ops, 1.0, 0, 0) == pytest.approx(750)

    def test_cumulative_adjustments_apply_after_base(self):
        model = TermPaymentModel(flat_payment_amount=1000)
        assert base_payment(model, None, 1.21, 100, 0) == pytest.approx(1331)

    def test_missing_model(self):
        assert base_payment(None, None, 1.0, 0, 0) == 0.0


def test_match_payment_model_by_name_or_first():
    rent = TermPaymentModel(model_type="Rent")
    option = TermPaymentModel(model_type="Option")

    assert match_payment_model(AgreementTerm(term_type="Option"), [rent, option]) is option
    assert match_payment_model(AgreementTerm(term_type="Operations", payment_model="Rent"), [option, rent]) is rent
    assert match_payment_model(AgreementTerm(), [option, rent]) is option
    assert match_payment_model(AgreementTerm(term_type="Missing"), [rent]) is None


def test_first_payment_policies():
    start = date(2024, 3, 15)
    for policy, expected in [
        ("Start with Term", start),
        ("Start next Jan 1 after Term commencement", date(2025, 1, 1)),
        ("Start 1st of month after commencement", date(2024, 4, 1)),
    ]:
        term = single_term(start, 1, first_payment_start=policy)
        assert first_payment_date(term) == expected

    december = single_term(date(2024, 12, 15), 1, first_payment_start="Start 1st of month after commencement")
    assert first_payment_date(december) == date(2025, 1, 1)

    explicit = single_term(start, 1, first_payment_date="2024-05-01")
    assert first_payment_date(explicit) == date(2024, 5, 1)


class TestStandardSchedule:
    def test_monthly_flat_schedule(self):
        term = single_term(date(2024, 1, 1), 1, first_payment_start="Start with Term")
        model = TermPaymentModel(model_type="Lease", payment_frequency="Monthly", flat_payment_amount=1200)

        payments = generate_term_payments(term, [model], context())

        assert len(payments) == 12
        assert [p.payment_date for p in payments] == [date(2024, month, 1) for month in range(1, 13)]
        assert all(p.payment_amount == pytest.approx(1200) for p in payments)
        assert all(p.prorata_factor == 1.0 for p in payments)
        assert payments[-1].payment_period_end == date(2024, 12, 31)
        assert payments[0].payment_source == PaymentSource.TERM_MODEL
        assert payments[0].payment_type == "Lease Term Payment"
        assert payments[0].payee == "Jane Smith"

    def test_annual_escalation_compounds_per_period(self):
        term = single_term(date(2024, 1, 1), 3)
        model = TermPaymentModel(
            model_type="Lease",
            payment_frequency="Annually",
            flat_payment_amount=1000,
            periodic_escalation_rate=10,
            periodic_escalation_frequency="Annually",
        )

        payments = generate_term_payments(term, [model], context())

        assert [p.payment_amount for p in payments] == pytest.approx([1000, 1100, 1210])
        assert [p.payment_date.year for p in payments] == [2024, 2025, 2026]

    def test_monthly_payments_escalate_annually(self):
        term = single_term(date(2024, 1, 1), 2)
        model = TermPaymentModel(
            model_type="Lease",
            payment_frequency="Monthly",
            flat_payment_amount=100,
            periodic_escalation_rate=12,
            periodic_escalation_frequency="Annually",
        )

        payments = generate_term_payments(term, [model], context())

        assert len(payments) == 24
        assert payments[11].payment_amount == pytest.approx(100)
        assert payments[12].payment_amount == pytest.approx(112)
        assert payments[23].payment_amount == pytest.approx(112)

    def test_escalation_continues_across_same_model_terms(self):
        terms = resolve_terms(
            [
                AgreementTerm(term_ordinal=1, term_type="Operations", payment_model="Rent", term_length_years=3),
                AgreementTerm(term_ordinal=2, term_type="Operations", payment_model="Rent", term_length_years=2, extension=True),
            ],
            date(2024, 1, 1),
        ).terms
        model = TermPaymentModel(
            model_type="Rent",
            payment_frequency="Annually",
            flat_payment_amount=1000,
            periodic_escalation_rate=10,
            periodic_escalation_frequency="Annually",
        )

        scheduled = schedule_terms(terms, [model], context())
        extension_payments = scheduled[1].periodic_payments

        assert extension_payments[0].payment_amount == pytest.approx(1331)
        assert extension_payments[0].previous_periods == 3
        assert extension_payments[0].payment_type == "Operations (ext) Term Payment"
        assert terms[1].periodic_payments == []

    def test_next_jan_first_policy_prorates_edges(self):
        term = single_term(date(2024, 7, 1), 3, first_payment_start="Start next Jan 1 after Term commencement")
        model = TermPaymentModel(model_type="Lease", payment_frequency="Annually", flat_payment_amount=1000)

        payments = generate_term_payments(term, [model], context())

        assert [p.payment_date for p in payments] == [date(2025, 1, 1), date(2026, 1, 1), date(2027, 1, 1)]
        assert [p.prorata_factor for p in payments] == [1.5041, 1.0, 0.4959]
        assert payments[0].payment_period_start == date(2024, 7, 1)
        assert payments[0].payment_amount == pytest.approx(1504.1)

    def test_prorated_annual_alignment(self):
        term = single_term(date(2024, 7, 1), 2)
        model = TermPaymentModel(
            model_type="Lease", payment_frequency="Annually", flat_payment_amount=1000, prorated_first_period=True
        )

        payments = generate_term_payments(term, [model], context())

        assert [(p.payment_period_start, p.payment_period_end) for p in payments] == [
            (date(2024, 7, 1), date(2024, 12, 31)),
            (date(2025, 1, 1), date(2025, 12, 31)),
            (date(2026, 1, 1), date(2026, 6, 30)),
        ]
        assert [p.prorata_factor for p in payments] == [0.5041, 1.0, 0.4959]

    def test_periods_are_contiguous_and_inside_the_term(self):
        term = single_term(date(2024, 2, 10), 3.5)
        model = TermPaymentModel(model_type="Lease", payment_frequency="Quarterly", flat_payment_amount=300)

        payments = generate_term_payments(term, [model], context())

        assert payments[0].payment_period_start == term.start_date
        assert payments[-1].payment_period_end == term.end_date
        for previous, current in zip(payments, payments[1:]):
            assert (current.payment_period_start - previous.payment_period_end).days == 1
            assert current.payment_date > previous.payment_date

    def test_once_per_term(self):
        term = single_term(date(2024, 1, 1), 5)
        model = TermPaymentModel(model_type="Lease", payment_frequency="Once per Term", flat_payment_amount=10000)

        payments = generate_term_payments(term, [model], context())

        assert len(payments) == 1
        assert payments[0].payment_period_end == date(2028, 12, 31)
        assert payments[0].payment_amount == pytest.approx(10000)

    def test_payment_lags(self):
        term = single_term(date(2024, 1, 1), 1)
        model = TermPaymentModel(
            model_type="Lease",
            payment_frequency="Monthly",
            flat_payment_amount=100,
            first_payment_lag=30,
            subsequent_payment_lag=10,
        )

        payments = generate_term_payments(term, [model], context())

        assert payments[0].late_payment_date == date(2024, 1, 31)
        assert payments[1].late_payment_date == date(2024, 2, 11)
        assert payments[1].due_date == date(2024, 2, 11)

    def test_lags_skip_extensions_unless_enabled(self):
        term = single_term(date(2024, 1, 1), 1, extension=True)
        model = TermPaymentModel(
            model_type="Lease", payment_frequency="Monthly", flat_payment_amount=100, first_payment_lag=30
        )

        assert generate_term_payments(term, [model], context())[0].late_payment_date is None

        enabled = model.model_copy(update={"apply_payment_lag_to_extension": True})
        assert generate_term_payments(term, [enabled], context())[0].late_payment_date == date(2024, 1, 31)

    def test_closing_date_stops_schedule(self):
        term = single_term(date(2024, 1, 1), 1)
        model = TermPaymentModel(model_type="Lease", payment_frequency="Monthly", flat_payment_amount=100)

        payments = generate_term_payments(term, [model], context(closing_date=date(2024, 6, 15)))

        assert len(payments) == 6
        assert payments[-1].payment_date == date(2024, 6, 1)

    def test_outside_date_flag(self):
        term = single_term(date(2024, 1, 1), 1)
        model = TermPaymentModel(model_type="Lease", payment_frequency="Quarterly", flat_payment_amount=100)

        payments = generate_term_payments(term, [model], context(outside_date=date(2024, 5, 1)))

        assert [p.after_outside_date for p in payments] == [False, False, True, True]


class TestPayees:
    def test_equal_split_between_grantors(self):
        term = single_term(date(2024, 1, 1), 1)
        model = TermPaymentModel(model_type="Lease", payment_frequency="Annually", flat_payment_amount=1200)

        payments = generate_term_payments(term, [model], context("Jane Smith", "Acme Farms, LLC"))

        assert [p.payee for p in payments] == ["Jane Smith", "Acme Farms"]
        assert [p.payment_amount for p in payments] == pytest.approx([600, 600])

    def test_explicit_split_and_payee_override(self):
        grantors = (Grantor(name="Jane Smith", payment_split=70), Grantor(name="John Smith"))
        term = single_term(date(2024, 1, 1), 1)
        model = TermPaymentModel(
            model_type="Lease", payment_frequency="Annually", flat_payment_amount=1200, payee="Escrow Agent"
        )

        payments = generate_term_payments(term, [model], ScheduleContext(grantors=grantors))

        assert [p.payment_amount for p in payments] == pytest.approx([840, 360])
        assert {p.payee for p in payments} == {"Escrow Agent"}


class TestNoPayments:
    def test_unknown_frequency(self):
        term = single_term(date(2024, 1, 1), 1)
        model = TermPaymentModel(model_type="Lease", payment_frequency="Biweekly", flat_payment_amount=100)
        assert model.payment_frequency == PaymentFrequency.UNKNOWN
        assert generate_term_payments(term, [model], context()) == []

    def test_cancelled_term(self):
        term = single_term(date(2024, 1, 1), 1).model_copy(update={"cancelled_by_ops": True})
        model = TermPaymentModel(model_type="Lease", payment_frequency="Annually", flat_payment_amount=100)
        assert generate_term_payments(term, [model], context()) == []

    def test_no_grantors(self):
        term = single_term(date(2024, 1, 1), 1)
        model = TermPaymentModel(model_type="Lease", payment_frequency="Annually", flat_payment_amount=100)
        assert generate_term_payments(term, [model], ScheduleContext()) == []

    def test_unresolved_term(self):
        term = single_term(date(2024, 1, 1), None)
        model = TermPaymentModel(model_type="Lease", payment_frequency="Annually", flat_payment_amount=100)
        assert generate_term_payments(term, [model], context()) == []

    def test_no_matching_model(self):
        term = single_term(date(2024, 1, 1), 1)
        model = TermPaymentModel(model_type="Rent", payment_frequency="Annually", flat_payment_amount=100)
        assert generate_term_payments(term, [model], context()) == []


class TestBlendedSchedule:
    @pytest.fixture
    def model(self):
        return TermPaymentModel(
            model_type="Lease",
            payment_frequency="Annually",
            flat_payment_amount=1000,
            prorated_first_period=True,
            periodic_escalation_rate=10,
            periodic_escalation_frequency="Annually",
        )

    def test_model_selects_blended_generator(self, model):
        assert model.uses_blended_escalation()
        assert not model.model_copy(update={"periodic_escalation_rate": 0}).uses_blended_escalation()

    def test_straddling_payment_is_day_weighted(self, model):
        term = single_term(date(2024, 7, 1), 2)

        payments = generate_term_payments(term, [model], context())

        assert len(payments) == 3
        assert payments[0].payment_amount == pytest.approx(1000 * 184 / 365)
        assert payments[1].payment_amount == pytest.approx(1000 * 181 / 365 + 1100 * 184 / 365)
        assert payments[2].payment_amount == pytest.approx(1100 * 181 / 365)
        assert payments[1].prorata_factor == 1.0
        assert 1000 < payments[1].payment_amount < 1100

    @staticmethod
    def sub_annual_model(frequency: str) -> TermPaymentModel:
        return TermPaymentModel(
            model_type="Lease",
            payment_frequency=frequency,
            flat_payment_amount=1200,
            prorated_first_period=True,
            periodic_escalation_rate=3,
            periodic_escalation_frequency="Annually",
        )

    def test_monthly_full_months_pay_the_base_amount(self):
        term = single_term(date(2025, 1, 1), 1)

        payments = generate_term_payments(term, [self.sub_annual_model("Monthly")], context())

        assert len(payments) == 12
        assert [p.payment_amount for p in payments] == pytest.approx([1200] * 12)
        assert [p.prorata_factor for p in payments] == [1.0] * 12

    def test_monthly_straddle_of_escalation_anniversary(self):
        term = single_term(date(2025, 1, 15), 2)

        payments = generate_term_payments(term, [self.sub_annual_model("Monthly")], context())
        by_date = {p.payment_date: p for p in payments}

        assert payments[0].payment_period_end == date(2025, 1, 31)
        assert payments[0].payment_amount == pytest.approx(1200 * 17 / 31)
        assert by_date[date(2025, 12, 1)].payment_amount == pytest.approx(1200)
        straddle = by_date[date(2026, 1, 1)]
        assert straddle.payment_amount == pytest.approx(1200 * 14 / 31 + 1236 * 17 / 31)
        assert straddle.prorata_factor == 1.0
        assert by_date[date(2026, 2, 1)].payment_amount == pytest.approx(1236)

    def test_quarterly_escalates_once_a_year(self):
        term = single_term(date(2025, 1, 1), 2)

        payments = generate_term_payments(term, [self.sub_annual_model("Quarterly")], context())

        assert [p.payment_date for p in payments][:4] == [
            date(2025, 1, 1),
            date(2025, 4, 1),
            date(2025, 7, 1),
            date(2025, 10, 1),
        ]
        assert [p.payment_amount for p in payments] == pytest.approx([1200] * 4 + [1236] * 4)
        assert [p.prorata_factor for p in payments] == [1.0] * 8

    def test_weights_sum_to_period_share(self, calendar):
        amount, weight, index = blended_period_amount(
            date(2025, 1, 1),
            date(2025, 12, 31),
            date(2024, 7, 1),
            0.10,
            1000,
            PaymentFrequency.ANNUALLY,
            calendar,
        )
        assert weight == pytest.approx(1.0)
        assert index == 0
        assert amount == pytest.approx(1000 * 181 / 365 + 1100 * 184 / 365)

    def test_without_straddle_matches_single_escalation_step(self, calendar):
        amount, weight, index = blended_period_amount(
            date(2025, 7, 1),
            date(2026, 6, 30),
            date(2024, 7, 1),
            0.10,
            1000,
            PaymentFrequency.ANNUALLY,
            calendar,
        )
        assert index == 1
        assert weight == pytest.approx(1.0)
        assert amount == pytest.approx(1100)
