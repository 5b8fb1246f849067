from .employee import EmploymentProfile, EmploymentType
from .payroll import (
    CompanyBreakdown,
    CompanyHours,
    Deductions,
    Earnings,
    EffectiveSettings,
    HoursSummary,
    PayrollResult,
    PayrollSettings,
    WorkTypeBreakdown,
    WorkTypeHours,
)
from .period import PayPeriod
from .policy import DEFAULT_POLICY, PayrollPolicy, TaxBracket, build_policy
from .time_entry import ApprovalStatus, TimeEntry, WorkType

__all__ = [
    'ApprovalStatus',
    'CompanyBreakdown',
    'CompanyHours',
    'DEFAULT_POLICY',
    'Deductions',
    'Earnings',
    'EffectiveSettings',
    'EmploymentProfile',
    'EmploymentType',
    'HoursSummary',
    'PayPeriod',
    'PayrollPolicy',
    'PayrollResult',
    'PayrollSettings',
    'TaxBracket',
    'TimeEntry',
    'WorkType',
    'WorkTypeBreakdown',
    'WorkTypeHours',
    'build_policy',
]
