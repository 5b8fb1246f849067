from decimal import Decimal
from typing import Tuple

from ..models.payroll import Earnings, EffectiveSettings
from ..utils.money import to_money

ZERO = Decimal("0")


def hourly_pay(regular_hours: Decimal, overtime_hours: Decimal,
               hourly_rate: Decimal, overtime_multiplier: Decimal) -> Tuple[Decimal, Decimal]:
    """Regular and overtime pay for a number of hours"""
    regular_pay = to_money(regular_hours * hourly_rate)
    overtime_pay = to_money(overtime_hours * hourly_rate * overtime_multiplier)
    return regular_pay, overtime_pay


def calculate_earnings(regular_hours: Decimal, overtime_hours: Decimal,
                       settings: EffectiveSettings) -> Earnings:
    """
    Gross earnings for the month.

    A positive fixed monthly salary replaces the hours-derived pay entirely;
    otherwise regular plus overtime pay is the salary.
    """
    regular_pay, overtime_pay = hourly_pay(
        regular_hours, overtime_hours, settings.hourly_rate, settings.overtime_multiplier
    )

    uses_fixed_salary = settings.base_salary > ZERO
    if uses_fixed_salary:
        base_salary = to_money(settings.base_salary)
    else:
        base_salary = regular_pay + overtime_pay

    transport = to_money(settings.transport_allowance)
    meal = to_money(settings.meal_allowance)
    phone = to_money(settings.phone_allowance)
    housing = to_money(settings.housing_allowance)
    total_allowances = transport + meal + phone + housing

    return Earnings(
        base_salary=base_salary,
        regular_pay=regular_pay,
        overtime_pay=overtime_pay,
        transport_allowance=transport,
        meal_allowance=meal,
        phone_allowance=phone,
        housing_allowance=housing,
        total_allowances=total_allowances,
        gross_income=base_salary + total_allowances,
        uses_fixed_salary=uses_fixed_salary,
    )
