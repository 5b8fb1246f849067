import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional, Protocol, Sequence

from ..exceptions import ProfileNotFound
from ..models.employee import EmploymentProfile
from ..models.payroll import (
    CompanyBreakdown, EffectiveSettings, HoursSummary, PayrollResult,
    PayrollSettings, WorkTypeBreakdown
)
from ..models.period import PayPeriod
from ..models.policy import DEFAULT_POLICY, PayrollPolicy
from ..models.time_entry import TimeEntry
from .deduction_calculator import calculate_deductions
from .earnings_calculator import calculate_earnings, hourly_pay
from .personal_tax_calculator import PersonalTaxCalculator
from .rate_resolver import resolve_settings
from .time_entry_aggregator import aggregate_time_entries

logger = logging.getLogger(__name__)


class PayrollDataSource(Protocol):
    """Read access to the attendance and HR records payroll depends on"""

    def fetch_approved_time_entries(self, employee_id: str, period_start: date,
                                    period_end: date) -> List[TimeEntry]:
        ...

    def fetch_employment_profile(self, employee_id: str) -> Optional[EmploymentProfile]:
        ...

    def fetch_payroll_settings(self, employee_id: str) -> Optional[PayrollSettings]:
        ...


def _company_breakdown(hours: HoursSummary, settings: EffectiveSettings):
    rows = []
    for item in hours.by_company:
        regular_pay, overtime_pay = hourly_pay(
            item.regular_hours, item.overtime_hours, settings.hourly_rate, settings.overtime_multiplier
        )
        rows.append(CompanyBreakdown(
            company=item.company,
            days=item.days,
            regular_hours=item.regular_hours,
            overtime_hours=item.overtime_hours,
            regular_pay=regular_pay,
            overtime_pay=overtime_pay,
            work_types=dict(item.work_types),
        ))
    return tuple(rows)


def _work_type_breakdown(hours: HoursSummary, settings: EffectiveSettings):
    rows = {}
    for work_type, item in hours.by_work_type.items():
        regular_pay, overtime_pay = hourly_pay(
            item.regular_hours, item.overtime_hours, settings.hourly_rate, settings.overtime_multiplier
        )
        rows[work_type] = WorkTypeBreakdown(
            work_type=work_type,
            regular_hours=item.regular_hours,
            overtime_hours=item.overtime_hours,
            regular_pay=regular_pay,
            overtime_pay=overtime_pay,
            companies=dict(item.companies),
        )
    return rows


def calculate_payroll(
    profile: Optional[EmploymentProfile],
    settings: Optional[PayrollSettings],
    entries: Iterable[TimeEntry],
    period: PayPeriod,
    policy: PayrollPolicy = DEFAULT_POLICY,
) -> PayrollResult:
    """
    Compute the payroll result for one employee and one month.

    Pure over its inputs: entries outside ``period`` are ignored and the
    same inputs always produce an equal result. Raises ProfileNotFound when
    ``profile`` is missing.
    """
    effective = resolve_settings(profile, settings, policy)

    in_period = [entry for entry in entries if period.contains(entry.entry_date)]
    hours = aggregate_time_entries(in_period)

    earnings = calculate_earnings(hours.regular_hours, hours.overtime_hours, effective)
    deductions = calculate_deductions(earnings.gross_income, effective, policy)
    income_tax = PersonalTaxCalculator(policy).monthly_tax(earnings.gross_income)

    total_deductions = deductions.total + income_tax
    net_income = earnings.gross_income - total_deductions

    return PayrollResult(
        employee_id=profile.employee_id,
        employee_name=profile.full_name,
        role=profile.role,
        period=period,
        work_days=hours.work_day_count,
        regular_hours=hours.regular_hours,
        overtime_hours=hours.overtime_hours,
        hourly_rate=effective.hourly_rate,
        overtime_multiplier=effective.overtime_multiplier,
        earnings=earnings,
        deductions=deductions,
        income_tax=income_tax,
        total_deductions=total_deductions,
        net_income=net_income,
        company_breakdown=_company_breakdown(hours, effective),
        work_type_breakdown=_work_type_breakdown(hours, effective),
        using_advanced_settings=effective.using_advanced_settings,
        clamped_entries=hours.clamped_entries,
        policy_version=policy.version,
    )


@dataclass
class BulkPayrollRun:
    """Results of a multi-employee run; excluded employees had no profile"""
    period: PayPeriod
    results: List[PayrollResult] = field(default_factory=list)
    excluded: List[str] = field(default_factory=list)


class PayrollService:
    """Fetch an employee's records from a data source and compute payroll"""

    def __init__(self, source: PayrollDataSource, policy: PayrollPolicy = DEFAULT_POLICY):
        self.source = source
        self.policy = policy

    def compute_payroll(self, employee_id: str, period: PayPeriod) -> PayrollResult:
        """Raises ProfileNotFound if the employee has no employment profile"""
        profile = self.source.fetch_employment_profile(employee_id)
        if profile is None:
            raise ProfileNotFound(employee_id)

        settings = self.source.fetch_payroll_settings(employee_id)
        entries = self.source.fetch_approved_time_entries(employee_id, period.start, period.end)

        result = calculate_payroll(profile, settings, entries, period, self.policy)
        logger.info(
            "Computed payroll for %s %s: gross=%s net=%s",
            employee_id, period, result.gross_income, result.net_income
        )
        return result

    def compute_all(self, period: PayPeriod, employee_ids: Sequence[str]) -> BulkPayrollRun:
        """Compute every employee independently; missing profiles are skipped"""
        run = BulkPayrollRun(period=period)

        for employee_id in employee_ids:
            try:
                run.results.append(self.compute_payroll(employee_id, period))
            except ProfileNotFound:
                logger.warning("Excluding %s from %s payroll: no employment profile", employee_id, period)
                run.excluded.append(employee_id)

        return run
