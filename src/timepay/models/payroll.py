from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

from .period import PayPeriod
from .time_entry import WorkType

ZERO = Decimal("0")


def _freeze_map(instance, name):
    """Replace a mapping field of a frozen dataclass with a read-only view"""
    object.__setattr__(instance, name, MappingProxyType(dict(getattr(instance, name))))


@dataclass(frozen=True)
class PayrollSettings:
    """Advanced per-employee override; ``None`` means "not set, fall back"."""
    employee_id: str
    hourly_rate: Optional[Decimal] = None
    base_salary: Optional[Decimal] = None
    overtime_multiplier: Optional[Decimal] = None
    enable_social_security: Optional[bool] = None
    enable_tax_withholding: Optional[bool] = None
    enable_provident_fund: Optional[bool] = None
    enable_health_insurance: Optional[bool] = None
    social_security_rate: Optional[Decimal] = None
    tax_withholding_rate: Optional[Decimal] = None
    provident_fund_rate: Optional[Decimal] = None
    transport_allowance: Optional[Decimal] = None
    meal_allowance: Optional[Decimal] = None
    phone_allowance: Optional[Decimal] = None
    housing_allowance: Optional[Decimal] = None
    health_insurance: Optional[Decimal] = None


@dataclass(frozen=True)
class EffectiveSettings:
    """Fully merged compensation and deduction configuration"""
    hourly_rate: Decimal
    base_salary: Decimal
    overtime_multiplier: Decimal
    enable_social_security: bool
    enable_tax_withholding: bool
    enable_provident_fund: bool
    enable_health_insurance: bool
    social_security_rate: Decimal
    tax_withholding_rate: Decimal
    provident_fund_rate: Decimal
    transport_allowance: Decimal
    meal_allowance: Decimal
    phone_allowance: Decimal
    housing_allowance: Decimal
    health_insurance: Decimal
    using_advanced_settings: bool = False


# ========== Aggregated hours ==========

@dataclass(frozen=True)
class CompanyHours:
    company: str
    regular_hours: Decimal
    overtime_hours: Decimal
    days: int
    work_types: Mapping[WorkType, Decimal] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        _freeze_map(self, "work_types")

    @property
    def total_hours(self) -> Decimal:
        return self.regular_hours + self.overtime_hours


@dataclass(frozen=True)
class WorkTypeHours:
    work_type: WorkType
    regular_hours: Decimal
    overtime_hours: Decimal
    companies: Mapping[str, Decimal] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        _freeze_map(self, "companies")

    @property
    def total_hours(self) -> Decimal:
        return self.regular_hours + self.overtime_hours


@dataclass(frozen=True)
class HoursSummary:
    """Hour totals for one employee over one period"""
    regular_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    work_days: FrozenSet[date] = frozenset()
    by_company: Tuple[CompanyHours, ...] = ()
    by_work_type: Mapping[WorkType, WorkTypeHours] = field(default_factory=dict, hash=False)
    clamped_entries: int = 0

    def __post_init__(self):
        _freeze_map(self, "by_work_type")

    @property
    def total_hours(self) -> Decimal:
        return self.regular_hours + self.overtime_hours

    @property
    def work_day_count(self) -> int:
        return len(self.work_days)


# ========== Money ==========

@dataclass(frozen=True)
class Earnings:
    base_salary: Decimal
    regular_pay: Decimal
    overtime_pay: Decimal
    transport_allowance: Decimal
    meal_allowance: Decimal
    phone_allowance: Decimal
    housing_allowance: Decimal
    total_allowances: Decimal
    gross_income: Decimal
    uses_fixed_salary: bool = False


@dataclass(frozen=True)
class Deductions:
    """Statutory deductions, income tax excluded"""
    social_security: Decimal
    tax_withholding: Decimal
    provident_fund: Decimal
    health_insurance: Decimal

    @property
    def total(self) -> Decimal:
        return self.social_security + self.tax_withholding + self.provident_fund + self.health_insurance


@dataclass(frozen=True)
class CompanyBreakdown:
    company: str
    days: int
    regular_hours: Decimal
    overtime_hours: Decimal
    regular_pay: Decimal
    overtime_pay: Decimal
    work_types: Mapping[WorkType, Decimal] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        _freeze_map(self, "work_types")

    @property
    def total_hours(self) -> Decimal:
        return self.regular_hours + self.overtime_hours

    @property
    def total_pay(self) -> Decimal:
        return self.regular_pay + self.overtime_pay


@dataclass(frozen=True)
class WorkTypeBreakdown:
    work_type: WorkType
    regular_hours: Decimal
    overtime_hours: Decimal
    regular_pay: Decimal
    overtime_pay: Decimal
    companies: Mapping[str, Decimal] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        _freeze_map(self, "companies")

    @property
    def total_hours(self) -> Decimal:
        return self.regular_hours + self.overtime_hours

    @property
    def total_pay(self) -> Decimal:
        return self.regular_pay + self.overtime_pay


@dataclass(frozen=True)
class PayrollResult:
    """Complete payroll computation for one employee and one month"""
    employee_id: str
    employee_name: str
    role: str
    period: PayPeriod
    work_days: int
    regular_hours: Decimal
    overtime_hours: Decimal
    hourly_rate: Decimal
    overtime_multiplier: Decimal
    earnings: Earnings
    deductions: Deductions
    income_tax: Decimal
    total_deductions: Decimal
    net_income: Decimal
    company_breakdown: Tuple[CompanyBreakdown, ...] = ()
    work_type_breakdown: Mapping[WorkType, WorkTypeBreakdown] = field(default_factory=dict, hash=False)
    using_advanced_settings: bool = False
    clamped_entries: int = 0
    policy_version: str = ""

    def __post_init__(self):
        _freeze_map(self, "work_type_breakdown")

    @property
    def total_hours(self) -> Decimal:
        return self.regular_hours + self.overtime_hours

    @property
    def gross_income(self) -> Decimal:
        return self.earnings.gross_income

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation; amounts serialized as strings"""
        earnings = self.earnings
        deductions = self.deductions
        return {
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "role": self.role,
            "period": str(self.period),
            "work_days": self.work_days,
            "total_hours": str(self.total_hours),
            "regular_hours": str(self.regular_hours),
            "overtime_hours": str(self.overtime_hours),
            "hourly_rate": str(self.hourly_rate),
            "overtime_multiplier": str(self.overtime_multiplier),
            "using_advanced_settings": self.using_advanced_settings,
            "clamped_entries": self.clamped_entries,
            "policy_version": self.policy_version,
            "earnings": {
                "base_salary": str(earnings.base_salary),
                "regular_pay": str(earnings.regular_pay),
                "overtime_pay": str(earnings.overtime_pay),
                "transport_allowance": str(earnings.transport_allowance),
                "meal_allowance": str(earnings.meal_allowance),
                "phone_allowance": str(earnings.phone_allowance),
                "housing_allowance": str(earnings.housing_allowance),
                "total_allowances": str(earnings.total_allowances),
                "gross_income": str(earnings.gross_income),
                "uses_fixed_salary": earnings.uses_fixed_salary,
            },
            "deductions": {
                "social_security": str(deductions.social_security),
                "tax_withholding": str(deductions.tax_withholding),
                "provident_fund": str(deductions.provident_fund),
                "health_insurance": str(deductions.health_insurance),
                "income_tax": str(self.income_tax),
                "total_deductions": str(self.total_deductions),
            },
            "net_income": str(self.net_income),
            "company_breakdown": [
                {
                    "company": item.company,
                    "days": item.days,
                    "regular_hours": str(item.regular_hours),
                    "overtime_hours": str(item.overtime_hours),
                    "total_hours": str(item.total_hours),
                    "regular_pay": str(item.regular_pay),
                    "overtime_pay": str(item.overtime_pay),
                    "total_pay": str(item.total_pay),
                    "work_types": {wt.value: str(hours) for wt, hours in item.work_types.items()},
                }
                for item in self.company_breakdown
            ],
            "work_type_breakdown": {
                work_type.value: {
                    "regular_hours": str(item.regular_hours),
                    "overtime_hours": str(item.overtime_hours),
                    "total_hours": str(item.total_hours),
                    "regular_pay": str(item.regular_pay),
                    "overtime_pay": str(item.overtime_pay),
                    "total_pay": str(item.total_pay),
                    "companies": {company: str(hours) for company, hours in item.companies.items()},
                }
                for work_type, item in self.work_type_breakdown.items()
            },
        }
