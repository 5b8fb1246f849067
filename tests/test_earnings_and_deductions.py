from decimal import Decimal

import pytest

from timepay.models.employee import EmploymentProfile
from timepay.models.payroll import PayrollSettings
from timepay.processors.deduction_calculator import calculate_deductions, calculate_social_security
from timepay.processors.earnings_calculator import calculate_earnings
from timepay.processors.rate_resolver import resolve_settings


def effective(**values):
    profile = EmploymentProfile(employee_id="T001", full_name="Somchai Jaidee", hourly_rate=Decimal("500"))
    settings = PayrollSettings(employee_id="T001", **values) if values else None
    return resolve_settings(profile, settings)


def test_hourly_earnings():
    earnings = calculate_earnings(Decimal("160"), Decimal("10"), effective())

    assert earnings.regular_pay == Decimal("80000.00")
    assert earnings.overtime_pay == Decimal("7500.00")
    assert earnings.base_salary == Decimal("87500.00")
    assert earnings.gross_income == Decimal("87500.00")
    assert earnings.uses_fixed_salary is False


def test_fixed_salary_replaces_hours_pay():
    settings = effective(base_salary=Decimal("30000"), meal_allowance=Decimal("1500"),
                         phone_allowance=Decimal("500"))

    earnings = calculate_earnings(Decimal("40"), Decimal("5"), settings)

    assert earnings.base_salary == Decimal("30000.00")
    assert earnings.total_allowances == Decimal("2000.00")
    assert earnings.gross_income == Decimal("32000.00")
    assert earnings.uses_fixed_salary is True


def test_allowances_add_to_hourly_pay():
    settings = effective(transport_allowance=Decimal("1000"), housing_allowance=Decimal("2500"))

    earnings = calculate_earnings(Decimal("10"), Decimal("0"), settings)

    assert earnings.gross_income == earnings.regular_pay + earnings.overtime_pay + earnings.total_allowances
    assert earnings.gross_income == Decimal("8500.00")


@pytest.mark.parametrize("gross, rate, expected", [
    ("0", "0.05", "0.00"),
    ("10000", "0.05", "500.00"),
    ("15000", "0.05", "750.00"),
    ("87500", "0.05", "750.00"),
    ("87500", "0.20", "750.00"),
    ("12345.67", "0.05", "617.28"),
])
def test_social_security_is_capped(gross, rate, expected):
    assert calculate_social_security(Decimal(gross), Decimal(rate)) == Decimal(expected)


def test_default_deductions():
    deductions = calculate_deductions(Decimal("87500.00"), effective())

    assert deductions.social_security == Decimal("750.00")
    assert deductions.tax_withholding == Decimal("2625.00")
    assert deductions.provident_fund == Decimal("2625.00")
    assert deductions.health_insurance == Decimal("0.00")
    assert deductions.total == Decimal("6000.00")


def test_disabled_social_security_is_zero_regardless_of_rate():
    settings = effective(enable_social_security=False, social_security_rate=Decimal("0.10"))

    deductions = calculate_deductions(Decimal("20000"), settings)

    assert deductions.social_security == Decimal("0.00")
    assert deductions.tax_withholding == Decimal("600.00")


def test_disabled_toggles_yield_exact_zero():
    settings = effective(
        enable_social_security=False,
        enable_tax_withholding=False,
        enable_provident_fund=False,
        enable_health_insurance=False,
        health_insurance=Decimal("750"),
    )

    deductions = calculate_deductions(Decimal("50000"), settings)

    for amount in (deductions.social_security, deductions.tax_withholding,
                   deductions.provident_fund, deductions.health_insurance):
        assert amount == Decimal("0.00")
        assert amount.as_tuple().exponent == -2
    assert deductions.total == 0


def test_health_insurance_is_fixed_amount():
    settings = effective(enable_health_insurance=True, health_insurance=Decimal("450"))

    deductions = calculate_deductions(Decimal("50000"), settings)

    assert deductions.health_insurance == Decimal("450.00")


def test_health_insurance_off_unless_enabled():
    profile = EmploymentProfile(employee_id="T001", full_name="Somchai Jaidee", health_insurance=Decimal("450"))

    deductions = calculate_deductions(Decimal("50000"), resolve_settings(profile))

    assert deductions.health_insurance == Decimal("0.00")
