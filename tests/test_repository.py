from datetime import date
from decimal import Decimal

import pytest

from timepay.api.mock_attendance import MockAttendanceAPI
from timepay.models.employee import EmploymentProfile, EmploymentType
from timepay.models.payroll import PayrollSettings
from timepay.models.time_entry import ApprovalStatus, WorkType
from timepay.processors.payroll_calculator import PayrollService, calculate_payroll


def test_profile_round_trip(repository):
    profile = EmploymentProfile(
        employee_id="T003",
        full_name="Anan Wongsa",
        role="admin",
        employment_type=EmploymentType.PROBATION,
        base_salary=Decimal("30000.00"),
        transport_allowance=Decimal("2000.00"),
    )

    repository.save_employment_profile(profile)

    assert repository.fetch_employment_profile("T003") == profile
    assert repository.fetch_employment_profile("nobody") is None


def test_save_profile_updates_existing(repository, hourly_profile):
    repository.save_employment_profile(hourly_profile)
    repository.save_employment_profile(EmploymentProfile(employee_id="T001", full_name="Somchai J."))

    assert len(repository.get_all_employees()) == 1
    stored = repository.fetch_employment_profile("T001")
    assert stored.full_name == "Somchai J."
    assert stored.hourly_rate is None


def test_settings_round_trip_keeps_unset_fields(repository, hourly_profile):
    repository.save_employment_profile(hourly_profile)
    settings = PayrollSettings(
        employee_id="T001",
        hourly_rate=Decimal("650.00"),
        enable_social_security=False,
        provident_fund_rate=Decimal("0.0500"),
    )

    repository.save_payroll_settings(settings)
    stored = repository.fetch_payroll_settings("T001")

    assert stored.hourly_rate == Decimal("650")
    assert stored.enable_social_security is False
    assert stored.enable_tax_withholding is None
    assert stored.provident_fund_rate == Decimal("0.05")
    assert stored.base_salary is None
    assert repository.fetch_payroll_settings("T002") is None


def test_invalid_rate_rejected(repository, hourly_profile):
    repository.save_employment_profile(hourly_profile)

    with pytest.raises(ValueError):
        repository.save_payroll_settings(PayrollSettings(employee_id="T001", tax_withholding_rate=Decimal("3")))


def test_delete_settings_falls_back_to_profile(repository, hourly_profile):
    repository.save_employment_profile(hourly_profile)
    repository.save_payroll_settings(PayrollSettings(employee_id="T001", hourly_rate=Decimal("700")))

    assert repository.delete_payroll_settings("T001") is True
    assert repository.delete_payroll_settings("T001") is False
    assert repository.fetch_payroll_settings("T001") is None


def test_fetch_only_approved_entries_in_range(repository, hourly_profile, make_entry):
    repository.save_employment_profile(hourly_profile)
    for entry in [
        make_entry(3, "8", "1", work_type=WorkType.PREP),
        make_entry(4, "6", status=ApprovalStatus.PENDING),
        make_entry(5, "7", status=ApprovalStatus.REJECTED),
        make_entry(date(2025, 4, 1), "8"),
        make_entry(6, "4", company="Sunrise Tutoring"),
    ]:
        repository.save_time_entry(entry)

    entries = repository.fetch_approved_time_entries("T001", date(2025, 3, 1), date(2025, 3, 31))

    assert [entry.entry_date.day for entry in entries] == [3, 6]
    assert entries[0].total_hours == Decimal("8")
    assert entries[0].overtime_hours == Decimal("1")
    assert entries[0].work_type == WorkType.PREP
    assert entries[1].company == "Sunrise Tutoring"


def test_repository_feeds_service(repository, hourly_profile, scenario_a_entries, period):
    repository.save_employment_profile(hourly_profile)
    for entry in scenario_a_entries:
        repository.save_time_entry(entry)

    result = PayrollService(repository).compute_payroll("T001", period)

    assert result == calculate_payroll(hourly_profile, None, scenario_a_entries, period)
    assert result.net_income == Decimal("70875.00")


def test_seeded_database_matches_mock_source(repository, period):
    api = MockAttendanceAPI()

    counts = api.seed_repository(repository, period)
    db_run = PayrollService(repository).compute_all(period, ["T001", "T002", "T003", "T004"])
    mock_run = PayrollService(api).compute_all(period, ["T001", "T002", "T003", "T004"])

    assert counts["profiles"] == 3
    assert counts["settings"] == 1
    assert db_run.excluded == ["T004"]
    assert [r.net_income for r in db_run.results] == [r.net_income for r in mock_run.results]


def test_reseeding_replaces_month_entries(repository, period):
    api = MockAttendanceAPI()

    api.seed_repository(repository, period)
    first = PayrollService(repository).compute_payroll("T001", period)
    api.seed_repository(repository, period)
    second = PayrollService(repository).compute_payroll("T001", period)

    assert second.total_hours == first.total_hours
    assert second == first


def test_delete_time_entries_limited_to_range(repository, hourly_profile, make_entry):
    repository.save_employment_profile(hourly_profile)
    repository.save_time_entry(make_entry(3, "8"))
    repository.save_time_entry(make_entry(4, "6", status=ApprovalStatus.PENDING))
    repository.save_time_entry(make_entry(date(2025, 4, 1), "8"))

    deleted = repository.delete_time_entries("T001", date(2025, 3, 1), date(2025, 3, 31))

    assert deleted == 2
    assert repository.fetch_approved_time_entries("T001", date(2025, 3, 1), date(2025, 3, 31)) == []
    assert len(repository.fetch_approved_time_entries("T001", date(2025, 4, 1), date(2025, 4, 30))) == 1
